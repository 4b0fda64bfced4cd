"""Sample catalog, leads and site visits for local development.

Run after `alembic upgrade head`; existing rows are wiped first.
"""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from estatehub.core.config import settings
from estatehub.models import Lead, Property, SiteVisit

# (title, price, city, area, beds, baths, type, status, featured, premium, budget)
PROPERTIES = [
    ("Skyline Residences 3BHK", 8_500_000, "Mumbai", 2200, 3, 3, "apartment", "hot-deal", True, True, False),
    ("Heritage Row Townhouse", 4_200_000, "Delhi", 1800, 4, 2, "townhouse", "active", False, False, True),
    ("Lakeview Sky Penthouse", 25_000_000, "Bangalore", 4500, 5, 5, "penthouse", "active", True, True, False),
    ("Garden Court Family Villa", 3_200_000, "Pune", 1500, 3, 2, "villa", "active", False, False, True),
    ("Palm Shore Beach Villa", 18_500_000, "Goa", 5200, 6, 6, "villa", "hot-deal", True, True, False),
    ("Warehouse District Loft", 5_800_000, "Hyderabad", 2800, 2, 2, "apartment", "active", True, False, False),
    ("Glasshouse Contemporary Villa", 12_500_000, "Chennai", 3200, 4, 3, "villa", "active", False, True, False),
    ("Riverside Court Apartment", 7_200_000, "Kolkata", 2100, 3, 2, "apartment", "active", False, False, True),
    ("Highway Frontage Plot", 2_400_000, "Jaipur", 4000, 0, 0, "plot", "active", False, False, True),
    ("Old Town Duplex", 6_100_000, "Ahmedabad", 1900, 3, 3, "townhouse", "sold", False, False, False),
]

COORDINATES = {
    "Mumbai": (19.076, 72.8777),
    "Delhi": (28.6139, 77.209),
    "Bangalore": (12.9716, 77.5946),
    "Pune": (18.5204, 73.8567),
    "Goa": (15.2993, 74.124),
    "Hyderabad": (17.385, 78.4867),
    "Chennai": (13.0827, 80.2707),
    "Kolkata": (22.5726, 88.3639),
    "Jaipur": (26.9124, 75.7873),
    "Ahmedabad": (23.0225, 72.5714),
}

AMENITIES = [
    ["Pool", "Gym", "Parking", "Security", "Clubhouse"],
    ["Garden", "Parking", "Modular Kitchen", "Terrace"],
    ["Private Lift", "Rooftop Access", "Concierge", "Spa"],
    ["Kids Play Area", "Power Backup", "Gated Community"],
]


def _properties(now: datetime):
    for i, row in enumerate(PROPERTIES):
        (title, price, city, area, beds, baths, ptype, status,
         featured, premium, budget) = row
        lat, lng = COORDINATES[city]
        yield Property(
            title=title,
            price=price,
            city=city,
            area=area,
            bedrooms=beds,
            bathrooms=baths,
            property_type=ptype,
            status=status,
            images=[f"/images/property-{i + 1}.jpg"],
            amenities=AMENITIES[i % len(AMENITIES)],
            description=f"{title} in {city}, {area} sq ft.",
            is_featured=featured,
            is_premium=premium,
            is_budget_friendly=budget,
            location={"lat": lat, "lng": lng},
            # Spread listings over the last fortnight so "new listings" varies
            created_at=now - timedelta(days=i * 1.5),
        )


async def seed():
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_maker() as session:
        print("Seeding EstateHub sample data")

        for model in (SiteVisit, Lead, Property):
            await session.execute(delete(model))
        await session.commit()
        print("Cleared existing data")

        now = datetime.now(timezone.utc)
        properties = list(_properties(now))
        session.add_all(properties)
        await session.flush()
        print(f"Created {len(properties)} properties")

        leads = [
            Lead(name="Rohan Mehra", phone="+91 98200 11223", status="raw",
                 source="website"),
            Lead(
                name="Kavya Iyer",
                phone="+91 99001 44556",
                property_id=properties[0].id,
                status="site-visit-requested",
                visit_date=now + timedelta(days=3),
            ),
            Lead(
                name="Arjun Nair",
                phone="+91 97400 77889",
                property_id=properties[2].id,
                status="negotiation",
                assigned_to="Sales Desk",
            ),
            Lead(
                name="Meera Joshi",
                phone="+91 90040 22334",
                email="meera.joshi@example.com",
                status="verified",
                requirement_details={
                    "property_type": "apartment",
                    "transaction_type": "buy",
                    "budget_range": {"min": 5_000_000, "max": 9_000_000},
                    "preferred_locations": ["Bandra", "Powai"],
                    "city": "Mumbai",
                    "configuration": "3BHK",
                    "purpose": "end-use",
                    "timeline": "3-6 months",
                    "loan_requirement": True,
                },
            ),
        ]
        session.add_all(leads)

        visits = [
            SiteVisit(name="Kavya Iyer", phone="+91 99001 44556",
                      property_id=properties[0].id,
                      date=now + timedelta(days=3), status="confirmed"),
            SiteVisit(name="Farhan Qureshi", phone="+91 98110 55667",
                      property_id=properties[4].id,
                      date=now + timedelta(days=5), status="pending"),
        ]
        session.add_all(visits)
        await session.commit()
        print(f"Created {len(leads)} leads and {len(visits)} site visits")

        # Validation
        for model in (Property, Lead, SiteVisit):
            count = (await session.execute(select(func.count()).select_from(model))).scalar_one()
            print(f"  {model.__tablename__}: {count}")
        print("Seeding complete")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
