# /tests/test_homework_repository_memory.py

import json
import logging

import pytest

from homework_tracker.config import SNAPSHOT_KEY
from homework_tracker.models.homework_model import HomeworkStatus
from homework_tracker.models.student_model import StudentCreate
from homework_tracker.services.database_helpers.homework_repository_memory import HomeworkRepositoryMemory
from homework_tracker.services.database_helpers.sample_data import SAMPLE_HISTORY_DAYS


async def _populate(storage):
    """Two classes, three students and a few records."""
    math = await storage.create_class("Math A", "Grade 7")
    english = await storage.create_class("English B")
    kim = await storage.create_student(StudentCreate(classId=math, name="Kim", phone="010-1111-2222"))
    lee = await storage.create_student(StudentCreate(classId=math, name="Lee"))
    park = await storage.create_student(StudentCreate(classId=english, name="Park", note="new"))
    await storage.save_homework_record(kim, "2024-05-01", HomeworkStatus.DONE)
    await storage.save_homework_record(kim, "2024-05-02", HomeworkStatus.PARTIAL, "half")
    await storage.save_homework_record(lee, "2024-05-01", HomeworkStatus.ABSENT)
    await storage.save_homework_record(park, "2024-05-01", HomeworkStatus.NOT_DONE)
    return {"classes": [math, english], "students": [kim, lee, park]}


@pytest.mark.asyncio
async def test_snapshot_round_trip_restores_identical_state(snapshot_store, ephemeral_storage):
    ids = await _populate(ephemeral_storage)

    restored = HomeworkRepositoryMemory(snapshot_store, seed_sample_data=False)

    assert await restored.get_classes() == await ephemeral_storage.get_classes()
    for class_id in ids["classes"]:
        assert await restored.get_students_by_class(class_id) == await ephemeral_storage.get_students_by_class(class_id)
    for student_id in ids["students"]:
        for day in ["2024-05-01", "2024-05-02", "2024-05-03"]:
            assert await restored.get_homework_record(student_id, day) == await ephemeral_storage.get_homework_record(student_id, day)
    assert await restored.get_student_stats(2024, 5) == await ephemeral_storage.get_student_stats(2024, 5)


@pytest.mark.asyncio
async def test_restored_instance_continues_id_sequence(snapshot_store, ephemeral_storage):
    first = await ephemeral_storage.create_class("Math A")

    restored = HomeworkRepositoryMemory(snapshot_store, seed_sample_data=False)
    second = await restored.create_class("English B")

    assert second == first + 1


@pytest.mark.asyncio
async def test_counters_never_fall_below_stored_ids(snapshot_store):
    # A snapshot whose counters lag behind the ids it contains.
    snapshot = {
        "classes": [{"id": 7, "name": "Math A", "createdAt": "t", "updatedAt": "t"}],
        "students": [],
        "homeworkRecords": [],
        "nextClassId": 1,
        "nextStudentId": 1,
        "nextRecordId": 1,
    }
    snapshot_store.set(SNAPSHOT_KEY, json.dumps(snapshot))

    storage = HomeworkRepositoryMemory(snapshot_store, seed_sample_data=False)

    assert await storage.create_class("English B") == 8


def test_snapshot_uses_documented_field_names(snapshot_store, ephemeral_storage):
    stored = json.loads(snapshot_store.get(SNAPSHOT_KEY))
    assert set(stored) == {"classes", "students", "homeworkRecords", "nextClassId", "nextStudentId", "nextRecordId"}


@pytest.mark.asyncio
async def test_every_mutation_writes_snapshot(mocker, ephemeral_storage):
    spy = mocker.spy(ephemeral_storage.snapshot_store, "set")

    class_id = await ephemeral_storage.create_class("Math A")
    await ephemeral_storage.update_class(class_id, "Math A+")
    student_id = await ephemeral_storage.create_student(StudentCreate(classId=class_id, name="Kim"))
    await ephemeral_storage.save_homework_record(student_id, "2024-05-01", HomeworkStatus.DONE)
    await ephemeral_storage.delete_student(student_id)
    await ephemeral_storage.delete_class(class_id)

    assert spy.call_count == 6


@pytest.mark.asyncio
async def test_reads_never_write_snapshot(mocker, ephemeral_storage):
    await _populate(ephemeral_storage)
    spy = mocker.spy(ephemeral_storage.snapshot_store, "set")

    await ephemeral_storage.get_classes()
    await ephemeral_storage.get_students_by_class(1)
    await ephemeral_storage.get_all_students()
    await ephemeral_storage.get_homework_record(1, "2024-05-01")
    await ephemeral_storage.get_homework_records(1)
    await ephemeral_storage.get_homework_records_by_class_and_date(1, "2024-05-01")
    await ephemeral_storage.get_monthly_stats(2024, 5)
    await ephemeral_storage.get_student_stats(2024, 5)

    spy.assert_not_called()


@pytest.mark.asyncio
async def test_failed_snapshot_write_is_surfaced(mocker, ephemeral_storage):
    mocker.patch.object(ephemeral_storage.snapshot_store, "set", side_effect=OSError("disk full"))

    with pytest.raises(OSError):
        await ephemeral_storage.create_class("Math A")


@pytest.mark.asyncio
async def test_empty_slot_is_seeded_with_sample_data(snapshot_store):
    storage = HomeworkRepositoryMemory(snapshot_store, seed_sample_data=True)

    [sample_class] = await storage.get_classes()
    [sample_student] = await storage.get_students_by_class(sample_class.id)
    records = await storage.get_homework_records(sample_student.id)

    assert len(records) == SAMPLE_HISTORY_DAYS
    assert len({r.date for r in records}) == SAMPLE_HISTORY_DAYS
    assert snapshot_store.get(SNAPSHOT_KEY) is not None


@pytest.mark.asyncio
async def test_existing_snapshot_is_not_reseeded(snapshot_store, ephemeral_storage):
    await ephemeral_storage.create_class("Only Class")

    storage = HomeworkRepositoryMemory(snapshot_store, seed_sample_data=True)

    assert [c.name for c in await storage.get_classes()] == ["Only Class"]


@pytest.mark.asyncio
async def test_unreadable_snapshot_is_discarded(snapshot_store, caplog):
    snapshot_store.set(SNAPSHOT_KEY, "{not json")

    with caplog.at_level(logging.ERROR):
        storage = HomeworkRepositoryMemory(snapshot_store, seed_sample_data=False)

    assert await storage.get_classes() == []
    assert "unreadable snapshot" in caplog.text
    assert json.loads(snapshot_store.get(SNAPSHOT_KEY))["classes"] == []


@pytest.mark.asyncio
async def test_batch_fetch_by_class_and_date(ephemeral_storage):
    await _populate(ephemeral_storage)

    records = await ephemeral_storage.get_homework_records_by_class_and_date(1, "2024-05-01")

    assert [(r.studentId, r.status) for r in records] == [(1, HomeworkStatus.DONE), (2, HomeworkStatus.ABSENT)]
    assert await ephemeral_storage.get_homework_records_by_class_and_date(1, "2024-05-09") == []


@pytest.mark.asyncio
async def test_returned_entities_are_copies(ephemeral_storage):
    await ephemeral_storage.create_class("Math A")

    [returned] = await ephemeral_storage.get_classes()
    returned.name = "Changed outside"

    assert (await ephemeral_storage.get_classes())[0].name == "Math A"
