"""Backend emitters and factory helpers."""

from json2nosql.config import Settings
from json2nosql.emitters.base import Emitter, RenderContext
from json2nosql.emitters.couchdb import CouchEmitter
from json2nosql.emitters.dynamodb import BATCH_WRITE_LIMIT, DynamoEmitter
from json2nosql.emitters.firebase import FirebaseEmitter
from json2nosql.emitters.mongodb import MongoEmitter
from json2nosql.models.options import Backend, parse_backend
from json2nosql.sources import Clock, IdSource

_EMITTERS: dict[Backend, type[Emitter]] = {
    Backend.MONGODB: MongoEmitter,
    Backend.FIREBASE: FirebaseEmitter,
    Backend.DYNAMODB: DynamoEmitter,
    Backend.COUCHDB: CouchEmitter,
}


def create_emitter(
    backend: Backend | str,
    *,
    id_source: IdSource | None = None,
    clock: Clock | None = None,
    settings: Settings | None = None,
) -> Emitter:
    """Create the emitter for ``backend``."""
    emitter_type = _EMITTERS[parse_backend(backend)]
    return emitter_type(id_source=id_source, clock=clock, settings=settings)


__all__ = [
    "BATCH_WRITE_LIMIT",
    "CouchEmitter",
    "DynamoEmitter",
    "Emitter",
    "FirebaseEmitter",
    "MongoEmitter",
    "RenderContext",
    "create_emitter",
]
