"""
Demo clients for a fresh install.

Seeding only happens when the store is empty, so a coach's own data is
never replaced by accident. ``force=True`` is for resetting a demo.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from .identifiers import CLIENT_ID_PREFIX, ENTRY_ID_PREFIX, IdGenerator
from .models import Client, ExerciseEntry, utc_now
from .repository import ClientStore

logger = logging.getLogger(__name__)


# Newest first, the way the coach logged them
_SAMPLE_HISTORY_TEMPLATE = [
    ("HIIT Exercise", ["Burpees", "Jump Rope", "Mountain Climbers"]),
    ("Initial Assessment – 30 min Cardio", ["Treadmill", "Cycling"]),
    ("Strength Training – Upper Body", ["Bench Press", "Rows", "Shoulder Press"]),
]

SAMPLE_CLIENTS = [
    {
        "full_name": "Sara Ahmed",
        "age": 28,
        "gender": "Female",
        "email": "sara.ahmed@example.com",
        "phone": "+20 10 1234 5678",
        "goal": "Weight Loss",
        "start_date": "2025-09-01",
        "history": [
            ("2025-09-12", "High intensity interval training"),
            ("2025-09-05", "First cardio session"),
            ("2025-08-28", "Focus on upper body strength"),
        ],
    },
    {
        "full_name": "Omar Hassan",
        "age": 32,
        "gender": "Male",
        "email": "omar.hassan@example.com",
        "phone": "+20 12 2345 6789",
        "goal": "Muscle Gain",
        "start_date": "2025-08-15",
        "history": [
            ("2025-09-10", "High intensity circuit"),
            ("2025-09-01", "Baseline cardio test"),
            ("2025-08-20", "Chest and shoulders focus"),
        ],
    },
    {
        "full_name": "Mariam Nabil",
        "age": 25,
        "gender": "Female",
        "email": "mariam.nabil@example.com",
        "phone": "+20 13 4567 8901",
        "goal": "General Fitness",
        "start_date": "2025-07-10",
        "history": [
            ("2025-08-15", "Interval training session"),
            ("2025-08-01", "Cardio baseline"),
            ("2025-07-20", "Upper body introduction"),
        ],
    },
    {
        "full_name": "Youssef Ali",
        "age": 29,
        "gender": "Male",
        "email": "youssef.ali@example.com",
        "phone": "+20 15 5566 6777",
        "goal": "Muscle Gain",
        "start_date": "2025-09-20",
        "history": [
            ("2025-10-15", "High intensity workout"),
            ("2025-10-05", "First cardio evaluation"),
            ("2025-09-25", "Building upper body strength"),
        ],
    },
    {
        "full_name": "Laila Samir",
        "age": 35,
        "gender": "Female",
        "email": "laila.samir@example.com",
        "phone": "+20 17 7788 8999",
        "goal": "Weight Loss",
        "start_date": "2025-06-01",
        "history": [
            ("2025-07-12", "Fat burning HIIT"),
            ("2025-06-25", "Starting cardio routine"),
            ("2025-06-15", "Light upper body work"),
        ],
    },
]


def build_sample_clients(
    id_generator: Optional[IdGenerator] = None,
    entry_id_generator: Optional[IdGenerator] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> list[Client]:
    clock = clock or utc_now
    ids = id_generator or IdGenerator(CLIENT_ID_PREFIX, clock=clock)
    entry_ids = entry_id_generator or IdGenerator(ENTRY_ID_PREFIX, clock=clock)

    clients = []
    for sample in SAMPLE_CLIENTS:
        history = [
            ExerciseEntry(
                id=entry_ids.generate(),
                date=day,
                title=title,
                notes=notes,
                tags=list(tags),
            )
            for (day, notes), (title, tags) in zip(sample["history"], _SAMPLE_HISTORY_TEMPLATE)
        ]
        fields = {k: v for k, v in sample.items() if k != "history"}
        clients.append(Client(
            id=ids.generate(),
            created_at=clock(),
            exercise_history=history,
            **fields,
        ))
    return clients


def initialize_sample_data(store: ClientStore, force: bool = False) -> bool:
    """
    Write the demo clients when the store is empty.

    Returns True if the store was seeded.
    """
    if not force and store.load():
        logger.debug("Store already has clients, skipping sample data")
        return False

    clients = build_sample_clients()
    store.save(clients)

    logger.info("Seeded sample clients", extra={"count": len(clients)})

    return True
