from datetime import timedelta

import pytest

from medref_api.app.core.exceptions import ConflictError, InvalidReferenceError
from medref_api.app.schemas.medication import MedicationFilters, MedicationUpdate
from medref_api.app.services.sample_data import SAMPLE_MEDICATIONS
from medref_api.app.services.sqlite_storage import SQLiteStorage

from tests.helpers import make_medication, make_user, run


def names(medications):
    return [med.name for med in medications]


# Users

def test_create_user_defaults_role_and_optional_fields(storage):
    user = run(storage.create_user(make_user()))
    assert user.id >= 1
    assert user.role == "user"
    assert user.license_number is None
    assert user.created_at is not None


def test_create_user_keeps_explicit_role(storage):
    user = run(storage.create_user(make_user(role="admin", license_number="ACP-77")))
    assert user.role == "admin"
    assert user.license_number == "ACP-77"


def test_user_lookup_by_email_is_exact(storage):
    created = run(storage.create_user(make_user("Medic@Example.com")))
    assert run(storage.get_user_by_email("Medic@Example.com")) == created
    assert run(storage.get_user_by_email("medic@example.com")) is None
    assert run(storage.get_user(created.id)) == created
    assert run(storage.get_user(created.id + 100)) is None


# Medications

def test_created_medication_reads_back_unchanged(storage):
    created = run(storage.create_medication(make_medication(pediatric_dosage="0.01 mg/kg")))
    fetched = run(storage.get_medication(created.id))
    assert fetched == created
    assert created.created_at == created.updated_at
    assert created.route_of_administration is None
    assert created.created_by is None


def test_get_missing_medication_returns_none(storage):
    assert run(storage.get_medication(999)) is None


def test_partial_update_only_touches_given_fields(storage):
    created = run(storage.create_medication(make_medication()))
    updated = run(storage.update_medication(created.id, MedicationUpdate(adult_dosage="X")))
    assert updated.adult_dosage == "X"
    assert updated.category == "cardiac"
    assert updated.side_effects == "Headache, hypotension"
    assert updated.name == created.name
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at
    assert run(storage.get_medication(created.id)) == updated


def test_update_with_explicit_null_clears_optional_field(storage):
    created = run(storage.create_medication(make_medication()))
    updated = run(storage.update_medication(created.id, MedicationUpdate(side_effects=None)))
    assert updated.side_effects is None
    assert updated.category == "cardiac"


def test_update_missing_medication_does_not_create(storage):
    assert run(storage.update_medication(42, MedicationUpdate(name="Ghost"))) is None
    assert run(storage.get_medications()) == []


def test_delete_medication_is_idempotent(storage):
    created = run(storage.create_medication(make_medication()))
    assert run(storage.delete_medication(created.id)) is True
    assert run(storage.delete_medication(created.id)) is False
    assert run(storage.get_medication(created.id)) is None


def test_create_medication_with_unknown_creator_fails(storage):
    with pytest.raises(InvalidReferenceError):
        run(storage.create_medication(make_medication(created_by=12345)))


def test_create_medication_records_creator(storage):
    user = run(storage.create_user(make_user()))
    created = run(storage.create_medication(make_medication(created_by=user.id)))
    assert created.created_by == user.id


# Filtering and pagination

def test_search_is_case_insensitive_substring(seeded_storage):
    results = run(seeded_storage.get_medications(MedicationFilters(search="epi")))
    assert names(results) == ["EPINEPHrine/Adrenalin"]


def test_search_matches_indications_and_classification(seeded_storage):
    by_indication = run(seeded_storage.get_medications(MedicationFilters(search="VERTIGO")))
    assert names(by_indication) == ["DimenhyDRINATE/Gravol"]
    by_class = run(seeded_storage.get_medications(MedicationFilters(search="opioid")))
    assert names(by_class) == ["Morphine", "Naloxone/Narcan"]


def test_search_treats_wildcards_literally(seeded_storage):
    run(seeded_storage.create_medication(make_medication(name="Oxygen 100%")))
    results = run(seeded_storage.get_medications(MedicationFilters(search="%")))
    assert names(results) == ["Oxygen 100%"]


def test_filters_combine_with_and(seeded_storage):
    results = run(seeded_storage.get_medications(MedicationFilters(alert_level="HIGH_ALERT", category="cardiac")))
    assert names(results) == ["EPINEPHrine/Adrenalin"]
    high_alert = run(seeded_storage.get_medications(MedicationFilters(alert_level="HIGH_ALERT")))
    assert names(high_alert) == ["EPINEPHrine/Adrenalin", "Morphine", "Naloxone/Narcan"]
    assert all(med.alert_level == "HIGH_ALERT" for med in high_alert)


def test_results_sorted_by_name_ignoring_case(seeded_storage):
    results = run(seeded_storage.get_medications())
    assert names(results) == [
        "DimenhyDRINATE/Gravol",
        "EPINEPHrine/Adrenalin",
        "Morphine",
        "Naloxone/Narcan",
        "Salbutamol/Albuterol/Ventolin",
    ]


def test_search_and_order_fold_accented_names(storage):
    for name in ("Étomidate", "ÉPINÉPHRINE", "éclair"):
        run(storage.create_medication(make_medication(name=name, classification="Test")))
    found = run(storage.get_medications(MedicationFilters(search="épin")))
    assert names(found) == ["ÉPINÉPHRINE"]
    found = run(storage.get_medications(MedicationFilters(search="ÉCLA")))
    assert names(found) == ["éclair"]
    assert names(run(storage.get_medications())) == ["éclair", "ÉPINÉPHRINE", "Étomidate"]


def test_pagination_applies_after_sorting(storage):
    for name in ("Charlie", "alpha", "Bravo"):
        run(storage.create_medication(make_medication(name=name)))
    page = run(storage.get_medications(MedicationFilters(limit=1, offset=1)))
    assert names(page) == ["Bravo"]
    assert run(storage.get_medications(MedicationFilters(offset=3))) == []


def test_default_limit_is_fifty(storage):
    for index in range(55):
        run(storage.create_medication(make_medication(name=f"Drug {index:02d}")))
    assert len(run(storage.get_medications())) == 50


# Favorites

def test_add_favorite_twice_keeps_one_row(seeded_storage):
    user = run(seeded_storage.create_user(make_user()))
    medication = run(seeded_storage.get_medications(MedicationFilters(search="morphine")))[0]
    run(seeded_storage.add_favorite(user.id, medication.id))
    favorite = run(seeded_storage.add_favorite(user.id, medication.id))
    assert favorite.user_id == user.id
    assert favorite.medication_id == medication.id
    favorites = run(seeded_storage.get_user_favorites(user.id))
    assert names(favorites) == ["Morphine"]
    assert favorites[0] == medication


def test_remove_favorite(seeded_storage):
    user = run(seeded_storage.create_user(make_user()))
    medication = run(seeded_storage.get_medications())[0]
    assert run(seeded_storage.remove_favorite(user.id, medication.id)) is False
    run(seeded_storage.add_favorite(user.id, medication.id))
    assert run(seeded_storage.is_favorite(user.id, medication.id)) is True
    assert run(seeded_storage.remove_favorite(user.id, medication.id)) is True
    assert run(seeded_storage.is_favorite(user.id, medication.id)) is False
    assert run(seeded_storage.get_user_favorites(user.id)) == []


def test_add_favorite_requires_existing_records(seeded_storage):
    user = run(seeded_storage.create_user(make_user()))
    with pytest.raises(InvalidReferenceError):
        run(seeded_storage.add_favorite(user.id, 999))
    with pytest.raises(InvalidReferenceError):
        run(seeded_storage.add_favorite(999, 1))


def test_deleting_medication_removes_its_favorites(seeded_storage):
    user = run(seeded_storage.create_user(make_user()))
    first, second = run(seeded_storage.get_medications(MedicationFilters(limit=2)))
    run(seeded_storage.add_favorite(user.id, first.id))
    run(seeded_storage.add_favorite(user.id, second.id))
    run(seeded_storage.delete_medication(first.id))
    assert run(seeded_storage.is_favorite(user.id, first.id)) is False
    assert names(run(seeded_storage.get_user_favorites(user.id))) == [second.name]


def test_deleting_user_removes_favorites_and_clears_creator(storage):
    user = run(storage.create_user(make_user()))
    other = run(storage.create_user(make_user("other@example.com")))
    medication = run(storage.create_medication(make_medication(created_by=user.id)))
    run(storage.add_favorite(user.id, medication.id))
    run(storage.add_favorite(other.id, medication.id))
    assert run(storage.delete_user(user.id)) is True
    assert run(storage.delete_user(user.id)) is False
    assert run(storage.is_favorite(user.id, medication.id)) is False
    assert run(storage.is_favorite(other.id, medication.id)) is True
    assert run(storage.get_medication(medication.id)).created_by is None


def test_deleting_user_stamps_cleared_medications(storage, monkeypatch):
    user = run(storage.create_user(make_user()))
    authored = run(storage.create_medication(make_medication(created_by=user.id)))
    untouched = run(storage.create_medication(make_medication(name="Aspirin")))
    later = authored.updated_at + timedelta(days=1)
    monkeypatch.setattr("medref_api.app.services.memory_storage.utcnow", lambda: later)
    monkeypatch.setattr("medref_api.app.services.sqlite_storage.utcnow", lambda: later)
    run(storage.delete_user(user.id))
    assert run(storage.get_medication(authored.id)).updated_at == later
    assert run(storage.get_medication(untouched.id)).updated_at == untouched.updated_at


def test_sqlite_duplicate_email_is_a_conflict(tmp_path):
    storage = SQLiteStorage.open(str(tmp_path / "medref.db"))
    run(storage.create_user(make_user()))
    with pytest.raises(ConflictError):
        run(storage.create_user(make_user(name="Someone Else")))
    assert run(storage.get_user_by_email("medic@example.com")).name == "Alex Paramedic"


# Sample data

def test_seed_sample_data_only_fills_empty_store(storage):
    assert run(storage.seed_sample_data()) == len(SAMPLE_MEDICATIONS)
    assert run(storage.seed_sample_data()) == 0
    assert len(run(storage.get_medications())) == len(SAMPLE_MEDICATIONS)


def test_returned_records_are_copies(storage):
    created = run(storage.create_medication(make_medication()))
    created.name = "Tampered"
    assert run(storage.get_medication(created.id)).name == "Nitroglycerin"
