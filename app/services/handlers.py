"""
CRUD Request Handlers

One handler class serves every entity type. Authors and books differ only
in the collaborators passed in: repository, mapper and schemas.

Each operation follows the same order:
1. Cheap checks on the input (ids, body shape), no database access
2. Existence check where a record must already exist
3. Full validation
4. Map the shape to a model and call the repository
5. Return an Outcome for app.services.responses.render()

Collaborator failures, whether a repository returning False or raising,
end in Outcome.internal_error(). The cause goes to the log, never to the
client, and no exception escapes a handler.

Every log line starts with a location such as "Authors-Update" so entries
from one request can be followed through the log.
"""

import functools
import logging
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from app.database import Base
from app.repositories.base import RepositoryBase
from app.services.mapping import EntityMapper
from app.services.responses import Outcome
from app.services.validation import check_id_match, check_path_id, validate_create, validate_update

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _guarded(action: str) -> Callable:
    """
    Convert any exception raised inside a handler operation into a 500.

    The decorated method's location string is rebuilt here so the log
    line still names the entity and action that failed.
    """

    def decorator(method: Callable[..., Outcome]) -> Callable[..., Outcome]:
        @functools.wraps(method)
        def wrapper(self: "CrudHandler", *args: Any, **kwargs: Any) -> Outcome:
            try:
                return method(self, *args, **kwargs)
            except Exception:
                logger.exception(f"{self.location(action)}: Unexpected failure")
                return Outcome.internal_error()

        return wrapper

    return decorator


class CrudHandler(Generic[ModelT]):
    """
    List/get/create/update/delete for one entity type.

    Args:
        name: Plural entity name used in log locations ("Authors")
        repository: Persistence for this entity
        mapper: Model <-> shape conversion
        create_schema: Shape accepted by create()
        update_schema: Shape accepted by update()
        base_url: Collection URL, used for the Location of created records
    """

    def __init__(
        self,
        *,
        name: str,
        repository: RepositoryBase[ModelT],
        mapper: EntityMapper,
        create_schema: type[BaseModel],
        update_schema: type[BaseModel],
        base_url: str = "",
    ) -> None:
        self.name = name
        self.repository = repository
        self.mapper = mapper
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.base_url = base_url

    def location(self, action: str) -> str:
        return f"{self.name}-{action}"

    def _failed(self, location: str, message: str) -> Outcome:
        logger.error(f"{location}: {message}")
        return Outcome.internal_error()

    def _missing(self, location: str, entity_id: int) -> Outcome:
        logger.warning(f"{location}: With ID: {entity_id} Not Found")
        return Outcome.not_found(f"{location}: With ID: {entity_id} Not Found")

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------
    @_guarded("List")
    def list(self) -> Outcome:
        """Every record, mapped to its read shape."""
        location = self.location("List")
        logger.info(f"{location}: Attempted To Get All Data")
        entities = self.repository.find_all()
        response = self.mapper.to_responses(entities)
        logger.info(f"{location}: Successfully Got All Data ({len(response)} records)")
        return Outcome.ok(response)

    @_guarded("Get")
    def get(self, entity_id: int) -> Outcome:
        """One record by id, or not_found."""
        location = self.location("Get")
        logger.info(f"{location}: Attempted With ID: {entity_id}")
        entity = self.repository.find_by_id(entity_id)
        if entity is None:
            return self._missing(location, entity_id)
        response = self.mapper.to_response(entity)
        logger.info(f"{location}: Successfully Got Data With ID: {entity_id}")
        return Outcome.ok(response)

    @_guarded("Create")
    def create(self, payload: Any) -> Outcome:
        """Validate, insert and return the created record."""
        location = self.location("Create")
        logger.info(f"{location}: Create Was Attempted")

        shape, result = validate_create(self.create_schema, payload)
        if not result.is_valid:
            logger.warning(f"{location}: Data Was Incomplete: {result.errors}")
            return Outcome.bad_request(result.errors)

        entity = self.mapper.to_entity(shape)
        if not self.repository.create(entity):
            return self._failed(location, "Creation Failed")

        logger.info(f"{location}: Data Created With ID: {entity.id}")
        return Outcome.created(
            self.mapper.to_response(entity),
            location=f"{self.base_url}/{entity.id}",
        )

    @_guarded("Update")
    def update(self, entity_id: int, payload: Any) -> Outcome:
        """Replace an existing record; the body id must match the path id."""
        location = self.location("Update")
        logger.info(f"{location}: Update With ID: {entity_id} Was Attempted")

        result = check_id_match(entity_id, payload)
        if not result.is_valid:
            logger.warning(f"{location}: Data Was Incomplete: {result.errors}")
            return Outcome.bad_request(result.errors)

        if not self.repository.is_exists(entity_id):
            return self._missing(location, entity_id)

        shape, result = validate_update(self.update_schema, entity_id, payload)
        if not result.is_valid:
            logger.warning(f"{location}: Data Was Incomplete: {result.errors}")
            return Outcome.bad_request(result.errors)

        entity = self.mapper.to_entity(shape)
        if not self.repository.update(entity):
            return self._failed(location, f"With ID: {entity_id} Was Not Updated")

        logger.info(f"{location}: With ID: {entity_id} Updated")
        return Outcome.no_content()

    @_guarded("Delete")
    def delete(self, entity_id: int) -> Outcome:
        """Remove an existing record."""
        location = self.location("Delete")
        logger.info(f"{location}: With ID: {entity_id} Was Attempted")

        result = check_path_id(entity_id)
        if not result.is_valid:
            logger.warning(f"{location}: Data Was Incomplete: {result.errors}")
            return Outcome.bad_request(result.errors)

        if not self.repository.is_exists(entity_id):
            return self._missing(location, entity_id)

        entity = self.repository.find_by_id(entity_id)
        if entity is None:
            # Removed by another request between the two lookups
            return self._missing(location, entity_id)
        if not self.repository.delete(entity):
            return self._failed(location, f"With ID: {entity_id} Was Not Deleted")

        logger.info(f"{location}: With ID: {entity_id} Deleted")
        return Outcome.no_content()
