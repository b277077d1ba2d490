"""Generic CRUD mapping between a resource class and its server collection."""

import logging
import queue
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from ..errors import HTTPNotFound
from .base import Reference, Resource, chef_id_of

if TYPE_CHECKING:
    from ..connection import Connection

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)


class ResourceClient(Generic[R]):
    """CRUD operations for one resource type over one connection.

    Resources returned by this client are built fresh for every call and
    are never cached.
    """

    def __init__(self, connection: "Connection", resource_class: type[R]) -> None:
        self._connection = connection
        self._resource_class = resource_class

    @property
    def resource_path(self) -> str:
        return self._resource_class.resource_type.resource_path

    def _build(self, attributes: Mapping[str, Any] | None) -> R:
        return self._resource_class(self._connection, attributes or {})

    def _member_path(self, chef_id: str) -> str:
        return f"{self.resource_path}/{chef_id}"

    def _coerce(self, obj: Resource | BaseModel | Mapping[str, Any]) -> R:
        if isinstance(obj, Resource):
            return self._build(obj.to_hash())
        if isinstance(obj, BaseModel):
            return self._build(obj.model_dump())
        if isinstance(obj, Mapping):
            return self._build(obj)
        raise TypeError(
            f"Cannot build a {self._resource_class.__name__} from {type(obj).__name__}"
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def all(self) -> list[R]:
        """List every resource in the collection.

        Only the identity attribute is populated; no per-item fetch is made.
        """
        chef_id = self._resource_class.resource_type.chef_id
        body = self._connection.get(self.resource_path)
        return [self._build({chef_id: identity}) for identity in body]

    def get(self, ref: Reference) -> R:
        """Fetch a single resource.

        Raises:
            HTTPNotFound: If no resource with the given identity exists.
        """
        body = self._connection.get(self._member_path(chef_id_of(ref)))
        return self._build(body)

    def find(self, ref: Reference) -> R | None:
        """Fetch a single resource, or return None if it does not exist."""
        try:
            return self.get(ref)
        except HTTPNotFound:
            return None

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def create(self, obj: Resource | BaseModel | Mapping[str, Any]) -> R:
        """Create a resource; attributes returned by the server win on conflict."""
        resource = self._coerce(obj)
        body = self._connection.post(self.resource_path, resource.to_json())
        if isinstance(body, Mapping):
            resource.attributes.merge(body)
        return resource

    def update(self, obj: Resource | BaseModel | Mapping[str, Any]) -> R:
        """Replace a resource on the server and return the server's copy."""
        resource = self._coerce(obj)
        body = self._connection.put(
            self._member_path(chef_id_of(resource)), resource.to_json()
        )
        return self._build(body)

    def delete(self, ref: Reference) -> R:
        """Delete a resource and return the representation the server sent back."""
        body = self._connection.delete(self._member_path(chef_id_of(ref)))
        return self._build(body)

    def delete_all(self) -> list[R]:
        """Delete every resource in the collection using a worker pool.

        Not atomic: if any single delete fails, the first failure is raised
        once all workers have stopped and the deletions that did succeed are
        not reported.
        """
        resources = self.all()
        if not resources:
            return []

        worklist: queue.Queue = queue.Queue()
        for resource in resources:
            worklist.put(resource)
        deleted: queue.Queue = queue.Queue()

        workers = max(1, self._connection.thread_count)
        logger.info(
            f"Deleting {len(resources)} {self.resource_path} with {workers} workers"
        )
        with ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="chefapi-delete",
        ) as pool:
            futures = [
                pool.submit(self._delete_worker, worklist, deleted)
                for _ in range(workers)
            ]

        failures = [exc for exc in (f.exception() for f in futures) if exc is not None]
        if failures:
            logger.warning(
                f"{len(failures)} delete worker(s) failed for {self.resource_path}"
            )
            raise failures[0]

        results: list[R] = []
        while True:
            try:
                results.append(deleted.get_nowait())
            except queue.Empty:
                break
        logger.info(f"Deleted {len(results)} {self.resource_path}")
        return results

    def _delete_worker(self, worklist: queue.Queue, deleted: queue.Queue) -> None:
        while True:
            try:
                resource = worklist.get_nowait()
            except queue.Empty:
                return
            deleted.put(self.delete(resource))
