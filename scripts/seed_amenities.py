from app.db.session import SessionLocal
from app.db.models.amenity import Amenity

AMENITIES = [
    "Air conditioning",
    "Wi-Fi",
    "Bottled water",
    "Luggage space",
    "Hotel pickup",
    "Hotel drop-off",
    "Airport pickup",
    "Airport drop-off",
    "Bilingual driver",
    "Restroom stop",
    "Child seats on request",
    "Wheelchair accessible",
    "Surfboard transport",
    "USB charging",
]

def upsert_amenity(db, name: str):
    name = (name or "").strip()
    if not name:
        return

    existing = db.query(Amenity).filter(Amenity.name == name).first()
    if existing:
        return existing

    row = Amenity(name=name)
    db.add(row)
    return row

def main():
    db = SessionLocal()
    try:
        for name in AMENITIES:
            upsert_amenity(db, name)

        db.commit()

        count = db.query(Amenity).count()
        print(f"Seed complete. Total amenities in DB: {count}")
    except Exception as e:
        db.rollback()
        print("Seed failed:", e)
        raise
    finally:
        db.close()

if __name__ == "__main__":
    main()
