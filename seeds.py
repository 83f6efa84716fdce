from rental_api import create_app
from rental_api.models.store import Store
from rental_api.utils.constants import Role
from rental_api.utils.security import generate_hash


def ensure_user(store: Store, name: str, email: str, password: str, role: str) -> str:
    """
    Ensure a user with `email` exists in the store.
    - If exists: update password hash and role (idempotent).
    - If not:   create a new user.
    """
    u = store.find_one("users", email=email)
    if u:
        store.update("users", u["_id"], {"password": generate_hash(password), "role": role})
        return u["_id"]
    return store.insert("users", {
        "name": name, "email": email, "password": generate_hash(password), "role": role, "image": "",
    })["_id"]


def main():
    app = create_app()
    store: Store = app.extensions["store"]

    # ---- Owner / customer demo accounts ----
    owner_id = ensure_user(store, "Demo Owner", "owner@example.com", "Owner12345", Role.OWNER)
    ensure_user(store, "Demo Customer", "customer@example.com", "Customer12345", Role.USER)

    # ---- Demo listings (create only if the owner has none) ----
    if not store.find("cars", owner=owner_id):
        store.insert("cars", {
            "owner": owner_id, "brand": "Toyota", "model": "Corolla", "year": 2021,
            "pricePerDay": 45.0, "category": "Sedan", "location": "Bangalore", "isAvailable": True,
            "image": "/static/images/corolla.jpg",
        })
        store.insert("bikes", {
            "owner": owner_id, "brand": "Yamaha", "model": "MT-07", "year": 2022,
            "pricePerDay": 40.0, "category": "Motorbike", "location": "Bangalore", "isAvailable": True,
            "image": "/static/images/yamaha.jpg",
        })
        store.insert("helmets", {
            "owner": owner_id, "brand": "Vega", "pricePerDay": 5.0, "category": "Helmet",
            "location": "Bangalore", "isAvailable": True,
        })

    store.close()

    print("Seed complete.")
    print("Owner login:    owner@example.com / Owner12345")
    print("Customer login: customer@example.com / Customer12345")


if __name__ == "__main__":
    main()
