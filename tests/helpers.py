import asyncio

from medref_api.app.schemas.medication import MedicationCreate
from medref_api.app.schemas.user import UserCreate


def run(coro):
    return asyncio.run(coro)


def make_medication(**overrides) -> MedicationCreate:
    fields = {
        "name": "Nitroglycerin",
        "classification": "Nitrate Vasodilator",
        "alert_level": "STANDARD",
        "category": "cardiac",
        "indications": "Chest pain of suspected cardiac origin",
        "contraindications": "Hypotension, recent PDE-5 inhibitor use",
        "adult_dosage": "0.4 mg SL q5min, max 3 doses",
        "side_effects": "Headache, hypotension",
    }
    fields.update(overrides)
    return MedicationCreate(**fields)


def make_user(email: str = "medic@example.com", **overrides) -> UserCreate:
    fields = {"email": email, "name": "Alex Paramedic"}
    fields.update(overrides)
    return UserCreate(**fields)
