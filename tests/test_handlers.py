"""
Tests for the CRUD Request Handlers

The handlers are exercised directly against an in-memory repository that
records every call, so these tests can assert which repository methods
ran (or did not run) for each input.
"""

import logging

import pytest

from app.models import Author
from app.repositories.base import RepositoryBase
from app.schemas import AuthorCreate, AuthorResponse, AuthorUpdate
from app.services.handlers import CrudHandler
from app.services.mapping import author_mapper
from app.services.responses import GENERIC_ERROR_MESSAGE, OutcomeKind


class RecordingRepository(RepositoryBase[Author]):
    """Dict-backed repository that logs each call by name."""

    def __init__(self, *, fail_writes: bool = False, raise_on: str | None = None):
        self.rows: dict[int, Author] = {}
        self.calls: list[str] = []
        self.fail_writes = fail_writes
        self.raise_on = raise_on
        self._next_id = 1

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.raise_on == name:
            raise RuntimeError(f"{name} exploded")

    def find_all(self):
        self._record("find_all")
        return list(self.rows.values())

    def find_by_id(self, entity_id):
        self._record("find_by_id")
        return self.rows.get(entity_id)

    def is_exists(self, entity_id):
        self._record("is_exists")
        return entity_id in self.rows

    def create(self, entity):
        self._record("create")
        if self.fail_writes:
            return False
        entity.id = self._next_id
        self._next_id += 1
        self.rows[entity.id] = entity
        return True

    def update(self, entity):
        self._record("update")
        if self.fail_writes:
            return False
        self.rows[entity.id] = entity
        return True

    def delete(self, entity):
        self._record("delete")
        if self.fail_writes:
            return False
        del self.rows[entity.id]
        return True

    def add(self, first_name: str, last_name: str) -> Author:
        author = Author(id=self._next_id, first_name=first_name, last_name=last_name, books=[])
        self.rows[author.id] = author
        self._next_id += 1
        return author


def make_handler(repository: RepositoryBase) -> CrudHandler:
    return CrudHandler(
        name="Authors",
        repository=repository,
        mapper=author_mapper,
        create_schema=AuthorCreate,
        update_schema=AuthorUpdate,
        base_url="/api/v1/authors",
    )


@pytest.fixture
def repository() -> RecordingRepository:
    return RecordingRepository()


@pytest.fixture
def handler(repository: RecordingRepository) -> CrudHandler:
    return make_handler(repository)


class TestList:
    def test_list_empty(self, handler):
        outcome = handler.list()

        assert outcome.kind is OutcomeKind.OK
        assert outcome.body == []

    def test_list_maps_every_record(self, handler, repository):
        repository.add("George", "Orwell")
        repository.add("Jane", "Austen")

        outcome = handler.list()

        assert [author.last_name for author in outcome.body] == ["Orwell", "Austen"]
        assert all(isinstance(author, AuthorResponse) for author in outcome.body)


class TestGet:
    def test_get_found(self, handler, repository):
        author = repository.add("George", "Orwell")

        outcome = handler.get(author.id)

        assert outcome.kind is OutcomeKind.OK
        assert outcome.body.first_name == "George"

    def test_get_missing(self, handler):
        outcome = handler.get(7)

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert outcome.message == "Authors-Get: With ID: 7 Not Found"


class TestCreate:
    def test_create_success(self, handler, repository):
        outcome = handler.create({"firstName": "Jane", "lastName": "Austen"})

        assert outcome.kind is OutcomeKind.CREATED
        assert outcome.body.id == 1
        assert outcome.location == "/api/v1/authors/1"
        assert repository.calls == ["create"]

    def test_invalid_input_never_reaches_repository(self, handler, repository):
        outcome = handler.create({"firstName": "Jane"})

        assert outcome.kind is OutcomeKind.BAD_REQUEST
        assert "lastName" in outcome.errors
        assert repository.calls == []

    def test_null_body(self, handler, repository):
        outcome = handler.create(None)

        assert outcome.kind is OutcomeKind.BAD_REQUEST
        assert repository.calls == []

    def test_create_refused(self, caplog):
        repository = RecordingRepository(fail_writes=True)
        handler = make_handler(repository)

        with caplog.at_level(logging.ERROR):
            outcome = handler.create({"firstName": "Jane", "lastName": "Austen"})

        assert outcome.kind is OutcomeKind.INTERNAL_ERROR
        assert outcome.message == GENERIC_ERROR_MESSAGE
        assert "Authors-Create: Creation Failed" in caplog.text

    def test_create_raises(self, caplog):
        repository = RecordingRepository(raise_on="create")
        handler = make_handler(repository)

        with caplog.at_level(logging.ERROR):
            outcome = handler.create({"firstName": "Jane", "lastName": "Austen"})

        assert outcome.kind is OutcomeKind.INTERNAL_ERROR
        assert outcome.message == GENERIC_ERROR_MESSAGE
        assert "create exploded" in caplog.text
        assert "Authors-Create" in caplog.text


class TestUpdate:
    def test_update_success(self, handler, repository):
        author = repository.add("George", "Orwell")

        outcome = handler.update(author.id, {"id": author.id, "firstName": "Eric", "lastName": "Blair"})

        assert outcome.kind is OutcomeKind.NO_CONTENT
        assert repository.calls == ["is_exists", "update"]
        assert repository.rows[author.id].first_name == "Eric"

    def test_id_mismatch_makes_no_calls(self, handler, repository):
        repository.add("A", "One")

        outcome = handler.update(5, {"id": 7, "firstName": "Eric", "lastName": "Blair"})

        assert outcome.kind is OutcomeKind.BAD_REQUEST
        assert "id" in outcome.errors
        assert repository.calls == []

    def test_non_positive_id_makes_no_calls(self, handler, repository):
        outcome = handler.update(0, {"id": 0, "firstName": "Eric", "lastName": "Blair"})

        assert outcome.kind is OutcomeKind.BAD_REQUEST
        assert repository.calls == []

    def test_update_missing(self, handler, repository):
        outcome = handler.update(3, {"id": 3, "firstName": "Eric", "lastName": "Blair"})

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert repository.calls == ["is_exists"]

    def test_update_invalid_fields_after_existence_check(self, handler, repository):
        author = repository.add("George", "Orwell")

        outcome = handler.update(author.id, {"id": author.id, "firstName": "Eric"})

        assert outcome.kind is OutcomeKind.BAD_REQUEST
        assert "lastName" in outcome.errors
        assert "update" not in repository.calls

    def test_update_refused(self, caplog):
        repository = RecordingRepository(fail_writes=True)
        author = repository.add("George", "Orwell")
        handler = make_handler(repository)

        with caplog.at_level(logging.ERROR):
            outcome = handler.update(author.id, {"id": author.id, "firstName": "Eric", "lastName": "Blair"})

        assert outcome.kind is OutcomeKind.INTERNAL_ERROR
        assert f"Authors-Update: With ID: {author.id} Was Not Updated" in caplog.text


class TestDelete:
    def test_delete_success(self, handler, repository):
        author = repository.add("George", "Orwell")

        outcome = handler.delete(author.id)

        assert outcome.kind is OutcomeKind.NO_CONTENT
        assert author.id not in repository.rows

    def test_delete_twice(self, handler, repository):
        author = repository.add("George", "Orwell")

        first = handler.delete(author.id)
        second = handler.delete(author.id)

        assert first.kind is OutcomeKind.NO_CONTENT
        assert second.kind is OutcomeKind.NOT_FOUND

    def test_delete_missing_is_always_not_found(self, handler, repository):
        outcomes = [handler.delete(42), handler.delete(42)]

        assert [outcome.kind for outcome in outcomes] == [OutcomeKind.NOT_FOUND] * 2
        assert "delete" not in repository.calls

    def test_delete_raises(self, caplog):
        repository = RecordingRepository(raise_on="is_exists")
        handler = make_handler(repository)

        with caplog.at_level(logging.ERROR):
            outcome = handler.delete(1)

        assert outcome.kind is OutcomeKind.INTERNAL_ERROR
        assert "Authors-Delete: Unexpected failure" in caplog.text
