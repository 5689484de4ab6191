# todoapp/mediator.py
"""
Request dispatch.

Every use case is a request object plus one handler class. Handlers
register themselves with ``@handles(RequestType)``; routers send requests
through a per-request ``Mediator`` bound to the request's DB session.
"""

import logging
from typing import Any, Callable, Dict, Type

from fastapi import Depends
from sqlalchemy.orm import Session

from todoapp.database import get_db

logger = logging.getLogger(__name__)

_registry: Dict[type, Type["RequestHandler"]] = {}


class RequestHandler:
    """Base class for use-case handlers"""

    def __init__(self, db: Session):
        self.db = db

    def handle(self, request: Any) -> Any:
        raise NotImplementedError


def handles(request_type: type) -> Callable[[Type[RequestHandler]], Type[RequestHandler]]:
    def register(handler_cls: Type[RequestHandler]) -> Type[RequestHandler]:
        if request_type in _registry:
            raise ValueError(f"A handler is already registered for {request_type.__name__}")
        _registry[request_type] = handler_cls
        return handler_cls

    return register


def handler_for(request_type: type) -> Type[RequestHandler]:
    try:
        return _registry[request_type]
    except KeyError:
        raise LookupError(f"No handler registered for {request_type.__name__}") from None


class Mediator:
    def __init__(self, db: Session):
        self.db = db

    def send(self, request: Any) -> Any:
        handler_cls = handler_for(type(request))
        logger.debug("Dispatching %s to %s", type(request).__name__, handler_cls.__name__)
        return handler_cls(self.db).handle(request)


def get_mediator(db: Session = Depends(get_db)) -> Mediator:
    return Mediator(db)
