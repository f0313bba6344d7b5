"""
Top-level router.

Routes are split into a public group and a protected group.  Every
route of the protected group runs the ``authenticate`` dependency
first, so its handlers are only reached with a verified account id.
"""

from fastapi import APIRouter, Depends

from .deps import authenticate
from .endpoints import events, info, registrations, users


public_router = APIRouter()
public_router.include_router(events.public_router, tags=["events"])
public_router.include_router(users.router, tags=["users"])
public_router.include_router(info.router, tags=["info"])

protected_router = APIRouter(dependencies=[Depends(authenticate)])
protected_router.include_router(events.protected_router, tags=["events"])
protected_router.include_router(registrations.router, tags=["registrations"])

router = APIRouter()
router.include_router(public_router)
router.include_router(protected_router)
