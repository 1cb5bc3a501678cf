# /tests/test_reconciliation_service.py

import pytest
from sqlalchemy import select

from school_admin.core.exceptions import EmptyBatchError, ReconciliationError
from school_admin.core.unit_of_work import UnitOfWork
from school_admin.models import ClassModel, Enrollment, Student, Subject, Teacher
from school_admin.services import reconciliation_service
from school_admin.services.reconciliation_service import ReconciliationService, is_delete_flag


@pytest.mark.parametrize("value, expected", [
    ("1", True),
    ("true", True),
    ("TRUE", False),
    ("True", False),
    ("yes", False),
    ("0", False),
    ("false", False),
    ("", False),
    ("true ", False),
    (" true", False),
    ("true\t", False),
    (" 1", False),
])
def test_is_delete_flag_matches_exact_literals_only(value, expected):
    assert is_delete_flag(value) is expected


@pytest.mark.asyncio
async def test_single_row_creates_entities_and_enrollment(uow, make_row, count_rows):
    result = await ReconciliationService(uow).apply_batch([make_row(toDelete="false")])

    assert result.rows_processed == 1
    assert result.enrollments_created == 1
    assert await count_rows(Teacher) == 1
    assert await count_rows(Student) == 1
    assert await count_rows(ClassModel) == 1
    assert await count_rows(Subject) == 1
    assert await count_rows(Enrollment) == 1


@pytest.mark.asyncio
async def test_applying_the_same_batch_twice_is_idempotent(session_factory, make_row, count_rows):
    batch = [
        make_row(teacherEmail="t@x.com", teacherName="T1", toDelete="false"),
        make_row(teacherEmail="t@x.com", teacherName="T1", studentEmail="s2@x.com", studentName="S2"),
    ]

    async with session_factory() as session:
        first = await ReconciliationService(UnitOfWork(session)).apply_batch(batch)
    async with session_factory() as session:
        second = await ReconciliationService(UnitOfWork(session)).apply_batch(batch)

    assert first.enrollments_created == 2
    assert second.enrollments_created == 0
    assert await count_rows(Teacher) == 1
    assert await count_rows(Enrollment) == 2


@pytest.mark.asyncio
async def test_delete_row_removes_existing_enrollment(session_factory, make_row, count_rows):
    async with session_factory() as session:
        await ReconciliationService(UnitOfWork(session)).apply_batch([make_row()])
    async with session_factory() as session:
        result = await ReconciliationService(UnitOfWork(session)).apply_batch([make_row(toDelete="true")])

    assert result.enrollments_deleted == 1
    assert await count_rows(Enrollment) == 0
    # Entities survive; only the edge is removed
    assert await count_rows(Teacher) == 1
    assert await count_rows(Student) == 1


@pytest.mark.asyncio
async def test_delete_of_missing_enrollment_is_a_noop(uow, make_row, count_rows):
    result = await ReconciliationService(uow).apply_batch([make_row(toDelete="1")])

    assert result.enrollments_deleted == 0
    assert await count_rows(Enrollment) == 0
    # Entity resolution still ran for the row
    assert await count_rows(Teacher) == 1


@pytest.mark.asyncio
async def test_create_then_delete_within_one_batch(uow, make_row, count_rows):
    result = await ReconciliationService(uow).apply_batch([make_row(), make_row(toDelete="1")])

    assert result.enrollments_created == 1
    assert result.enrollments_deleted == 1
    assert await count_rows(Enrollment) == 0


@pytest.mark.asyncio
async def test_uppercase_true_is_treated_as_upsert(uow, make_row, count_rows):
    await ReconciliationService(uow).apply_batch([make_row(toDelete="TRUE")])

    assert await count_rows(Enrollment) == 1


@pytest.mark.parametrize("flag", ["true ", " true", "true\t", " 1"])
def test_import_row_keeps_padded_delete_flag(make_row, flag):
    row = make_row(toDelete=flag)

    assert row.to_delete == flag
    assert not is_delete_flag(row.to_delete)


@pytest.mark.asyncio
@pytest.mark.parametrize("flag", ["true ", " true", "true\t", " 1"])
async def test_padded_delete_flag_keeps_existing_enrollment(session_factory, make_row, count_rows, flag):
    async with session_factory() as session:
        await ReconciliationService(UnitOfWork(session)).apply_batch([make_row()])
    async with session_factory() as session:
        result = await ReconciliationService(UnitOfWork(session)).apply_batch([make_row(toDelete=flag)])

    assert result.enrollments_deleted == 0
    assert await count_rows(Enrollment) == 1


@pytest.mark.asyncio
async def test_names_are_canonicalized_before_being_stored(uow, session_factory, make_row):
    batch = [
        make_row(teacherName="Mr Smyth", classname="Old name"),
        make_row(studentEmail="student2@school.edu", teacherName="Mr Smith", classname="P1 Integrity"),
    ]

    await ReconciliationService(uow).apply_batch(batch)

    async with session_factory() as session:
        teachers = (await session.execute(select(Teacher))).scalars().all()
        classes = (await session.execute(select(ClassModel))).scalars().all()
    assert [t.name for t in teachers] == ["Mr Smith"]
    assert [c.name for c in classes] == ["P1 Integrity"]


@pytest.mark.asyncio
async def test_existing_entity_names_are_overwritten(session_factory, make_row):
    async with session_factory() as session:
        await ReconciliationService(UnitOfWork(session)).apply_batch([make_row(subjectName="Maths")])
    async with session_factory() as session:
        await ReconciliationService(UnitOfWork(session)).apply_batch([make_row(subjectName="Mathematics II")])

    async with session_factory() as session:
        subjects = (await session.execute(select(Subject))).scalars().all()
    assert [(s.code, s.name) for s in subjects] == [("MATHS", "Mathematics II")]


@pytest.mark.asyncio
async def test_empty_batch_is_rejected_before_any_write(uow, count_rows):
    with pytest.raises(EmptyBatchError):
        await ReconciliationService(uow).apply_batch([])

    assert await count_rows(Teacher) == 0


@pytest.mark.asyncio
async def test_failure_rolls_back_the_whole_batch(uow, make_row, count_rows, monkeypatch):
    """
    GIVEN: A three-row batch whose enrollment pass fails on the last row.
    WHEN:  apply_batch is called.
    THEN:  Nothing from the batch is visible afterwards, entities included.
    """
    service = ReconciliationService(uow)
    original_ensure = service.enrollments.ensure
    calls = {"count": 0}

    async def failing_ensure(*args):
        calls["count"] += 1
        if calls["count"] == 3:
            raise RuntimeError("connection lost")
        return await original_ensure(*args)

    monkeypatch.setattr(service.enrollments, "ensure", failing_ensure)

    batch = [
        make_row(studentEmail="a@school.edu"),
        make_row(studentEmail="b@school.edu"),
        make_row(studentEmail="c@school.edu"),
    ]
    with pytest.raises(ReconciliationError) as exc_info:
        await service.apply_batch(batch)

    assert exc_info.value.row_count == 3
    assert exc_info.value.status_code == 500
    assert await count_rows(Enrollment) == 0
    assert await count_rows(Student) == 0
    assert await count_rows(Teacher) == 0


@pytest.mark.asyncio
async def test_unresolved_entity_id_aborts_the_batch(uow, make_row, count_rows, monkeypatch):
    async def lose_teacher_ids(self, rows):
        return {}, {"student1@school.edu": 1}, {"P1-1": 1}, {"MATHS": 1}

    monkeypatch.setattr(reconciliation_service.ReconciliationService, "_resolve_entities", lose_teacher_ids)

    with pytest.raises(ReconciliationError, match="Failed to resolve entity IDs"):
        await ReconciliationService(uow).apply_batch([make_row()])

    assert await count_rows(Enrollment) == 0
