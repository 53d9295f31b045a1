"""
Seed demo services, technicians and bookings
Usage: python seed_demo_data.py

Collections that already hold documents are left alone.
"""
import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from booking_admin.errors import StoreError
from booking_admin.firebase import get_firestore_client
from booking_admin.models import BOOKINGS, SERVICES, TECHNICIANS, BookingStatus
from booking_admin.store import DocumentStore

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

DEMO_SERVICES = [
    {"title": "Electrician", "category": "Electrical", "description": "Professional electrical repairs and installations", "price": 1500, "duration": 120},
    {"title": "Plumber", "category": "Plumbing", "description": "Plumbing repairs, installations, and maintenance", "price": 1200, "duration": 90},
    {"title": "AC Repair", "category": "Appliances", "description": "Air conditioning repair and maintenance services", "price": 2000, "duration": 180},
    {"title": "Carpenter", "category": "Carpentry", "description": "Furniture repair, installation, and custom woodwork", "price": 1800, "duration": 150},
    {"title": "Painter", "category": "Painting", "description": "Interior and exterior painting services", "price": 2500, "duration": 240},
]

DEMO_TECHNICIANS = [
    {"name": "Rajesh Kumar", "email": "rajesh.kumar@example.com", "phone": "+91 98765 43210", "skills": ["Electrician", "AC Repair"], "experience": 8},
    {"name": "Priya Sharma", "email": "priya.sharma@example.com", "phone": "+91 98765 43211", "skills": ["Plumber", "Carpenter"], "experience": 5},
    {"name": "Amit Patel", "email": "amit.patel@example.com", "phone": "+91 98765 43212", "skills": ["Electrician", "Plumber"], "experience": 10},
    {"name": "Sneha Reddy", "email": "sneha.reddy@example.com", "phone": "+91 98765 43213", "skills": ["AC Repair", "Painter"], "experience": 6},
    {"name": "Vikram Singh", "email": "vikram.singh@example.com", "phone": "+91 98765 43214", "skills": ["Carpenter", "Painter"], "experience": 7},
]

# (service index, technician index or None, status, customer, phone, address, notes)
DEMO_BOOKINGS = [
    (0, 0, BookingStatus.ASSIGNED, "Ramesh Gupta", "+91 98765 12345", "123 Main Street, Mumbai", "Need urgent electrical repair"),
    (1, None, BookingStatus.PENDING, "Sunita Mehta", "+91 98765 12346", "456 Park Avenue, Delhi", "Leaky faucet in kitchen"),
    (2, 3, BookingStatus.COMPLETED, "Anil Verma", "+91 98765 12347", "789 Oak Road, Bangalore", None),
    (0, 2, BookingStatus.ASSIGNED, "Kavita Joshi", "+91 98765 12348", "321 Elm Street, Pune", "Install new ceiling fan"),
    (3, None, BookingStatus.PENDING, "Mohit Agarwal", "+91 98765 12349", "654 Pine Lane, Hyderabad", "Fix broken cabinet door"),
    (4, 4, BookingStatus.COMPLETED, "Deepak Nair", "+91 98765 12350", "987 Cedar Drive, Chennai", None),
    (1, 1, BookingStatus.ASSIGNED, "Meera Desai", "+91 98765 12351", "147 Maple Court, Kolkata", "Bathroom pipe replacement"),
    (2, None, BookingStatus.PENDING, "Arjun Iyer", "+91 98765 12352", "258 Birch Way, Jaipur", "AC not cooling properly"),
]


async def seed_collection(store: DocumentStore, collection: str, documents: list[dict], label) -> list[str]:
    """Add documents to an empty collection; returns the ids now in it"""
    existing = await store.list_documents(collection)
    if existing:
        logger.info(f"⚠️  {collection} collection already has data. Skipping...")
        return [doc["id"] for doc in existing]

    logger.info(f"📝 Seeding {len(documents)} {collection}...")
    ids = []
    for document in documents:
        doc_id = await store.create_document(collection, document)
        ids.append(doc_id)
        logger.info(f"  ✓ Added {label(document)} (ID: {doc_id})")
    return ids


def build_bookings(service_ids: list[str], technician_ids: list[str]) -> list[dict]:
    now = datetime.now(timezone.utc)
    bookings = []
    for i, (service, technician, status, name, phone, address, notes) in enumerate(DEMO_BOOKINGS):
        booking = {
            "serviceId": service_ids[service % len(service_ids)] if service_ids else "",
            "technicianId": (
                technician_ids[technician % len(technician_ids)]
                if technician is not None and technician_ids
                else None
            ),
            "status": status.value,
            "customerName": name,
            "customerPhone": phone,
            "customerAddress": address,
            "createdAt": now - timedelta(days=len(DEMO_BOOKINGS) - i),
            "scheduledAt": now + timedelta(days=i + 1),
        }
        if notes:
            booking["notes"] = notes
        bookings.append(booking)
    return bookings


async def seed_demo_data() -> None:
    store = DocumentStore(get_firestore_client())

    service_ids = await seed_collection(store, SERVICES, [dict(s, isActive=True) for s in DEMO_SERVICES], lambda s: f"service: {s['title']}")
    technician_ids = await seed_collection(
        store,
        TECHNICIANS,
        [dict(t, active=True, verified=False) for t in DEMO_TECHNICIANS],
        lambda t: f"technician: {t['name']}",
    )
    await seed_collection(
        store,
        BOOKINGS,
        build_bookings(service_ids, technician_ids),
        lambda b: f"booking: {b['customerName']} - {b['status']}",
    )


if __name__ == "__main__":
    logger.info("🚀 Starting demo data seeding...\n")
    try:
        asyncio.run(seed_demo_data())
    except StoreError as e:
        logger.error(f"❌ Error seeding demo data: {e.code} {e.message}")
        sys.exit(1)
    logger.info("\n✅ Demo data seeding completed successfully!")
