import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, List, Optional, Union

from catalog.errors import ServiceNotFoundError, ServiceValidationError, StorageError
from catalog.repos.base import ServiceStore
from catalog.schemas.services import SERVICE_FIELDS, ServiceCreate, ServiceRead, ServiceUpdate
from catalog.services.validation import collect_problems


logger = logging.getLogger(__name__)


def read_services_file(path: Path) -> Optional[List[Any]]:
    """
    Read the raw JSON array from disk.

    Returns None when the file does not exist. Raises StorageError when it
    can't be read, isn't valid JSON, or isn't an array.
    """
    if not path.exists():
        return None
    # ValueError covers JSONDecodeError and UnicodeDecodeError
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise StorageError(f"Could not read {path}: {e}") from e
    if not isinstance(data, list):
        raise StorageError(f"{path} does not contain a JSON array")
    return data


def write_services_file(path: Path, services: List[ServiceRead]) -> None:
    """
    Replace the file with a snapshot of ``services``.

    Writes to a temp file in the same directory and renames it over the
    target, so readers only ever see a complete array.
    """
    payload = [
        {"id": service.id, **service.model_dump(include=set(SERVICE_FIELDS))}
        for service in services
    ]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except (OSError, TypeError, ValueError) as e:
        raise StorageError(f"Could not write {path}: {e}") from e


def parse_services(data: List[Any]) -> List[ServiceRead]:
    """
    Turn raw JSON entries into records.

    Non-object entries are skipped. Entries without a usable integer id
    (files written before ids existed) get ids after the highest one seen.
    """
    parsed = []
    seen_ids = set()
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("Skipping entry %d: expected an object, got %s", index, type(item).__name__)
            continue
        raw_id = item.get("id")
        service_id = None
        if isinstance(raw_id, int) and not isinstance(raw_id, bool) and raw_id > 0 and raw_id not in seen_ids:
            service_id = raw_id
            seen_ids.add(raw_id)
        fields = {name: "" if item.get(name) is None else str(item.get(name)) for name in SERVICE_FIELDS}
        parsed.append((service_id, fields))

    next_id = max(seen_ids, default=0)
    services = []
    for service_id, fields in parsed:
        if service_id is None:
            next_id += 1
            service_id = next_id
        services.append(ServiceRead(id=service_id, **fields))
    return services


class JsonServiceStore(ServiceStore):
    """Catalog kept in memory and mirrored to a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.lock = threading.Lock()
        self._services: List[ServiceRead] = []
        self._last_id = 0

    def load(self) -> None:
        try:
            data = read_services_file(self.path)
        except StorageError as e:
            logger.error("Keeping current services, load failed: %s", e)
            return

        if data is None:
            logger.info("No services file at %s, starting empty", self.path)
            services = []
        else:
            services = parse_services(data)

        codes = set()
        for service in services:
            if service.app_code in codes:
                logger.warning("Duplicate app_code %r in %s", service.app_code, self.path)
            codes.add(service.app_code)

        with self.lock:
            self._services = services
            self._last_id = max((service.id for service in services), default=0)
        logger.info("Loaded %d services from %s", len(services), self.path)

    def add(self, fields: ServiceCreate) -> ServiceRead:
        with self.lock:
            problems = collect_problems(fields, self._services)
            if problems:
                raise ServiceValidationError(problems)

            self._last_id += 1
            service = ServiceRead(id=self._last_id, **fields.model_dump(include=set(SERVICE_FIELDS)))
            self._services.append(service)
            self._persist()

        logger.info("Service added: id=%s app_code=%s", service.id, service.app_code)
        return service

    def update(self, service_id: int, fields: ServiceUpdate) -> ServiceRead:
        with self.lock:
            index = self._index_of(service_id)
            if index is None:
                raise ServiceNotFoundError(service_id)

            problems = collect_problems(fields, self._services, exclude_id=service_id)
            if problems:
                raise ServiceValidationError(problems)

            service = ServiceRead(id=service_id, **fields.model_dump(include=set(SERVICE_FIELDS)))
            self._services[index] = service
            self._persist()

        logger.info("Service updated: id=%s app_code=%s", service.id, service.app_code)
        return service

    def all(self) -> List[ServiceRead]:
        return list(self._services)

    def find_by_id(self, service_id: int) -> Optional[ServiceRead]:
        for service in self._services:
            if service.id == service_id:
                return service
        return None

    def _index_of(self, service_id: int) -> Optional[int]:
        for index, service in enumerate(self._services):
            if service.id == service_id:
                return index
        return None

    def _persist(self) -> None:
        # Caller holds self.lock. The in-memory change stands even if the write fails.
        try:
            write_services_file(self.path, self._services)
        except StorageError:
            logger.exception("Failed to persist services to %s", self.path)
