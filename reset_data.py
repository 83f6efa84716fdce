"""
reset_data.py
-------------
Utility script to clear all stored data (users, vehicles, bookings) from the
file named by DATA_PATH (data.pkl by default).

Usage:
    $ python reset_data.py

After running this script, you can repopulate sample data by executing:
    $ python seeds.py
"""

from rental_api import create_app


def main():
    """Empty every collection and write the empty store back to disk."""
    app = create_app()
    store = app.extensions["store"]
    store.clear()
    store.close()

    print(f"{store.path} has been cleared.")
    print("Tip: Run `python seeds.py` to regenerate demo data.")


if __name__ == "__main__":
    main()
