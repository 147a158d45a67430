import logging

import clubfinance.models  # noqa: F401
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clubfinance.auth.deps import PasswordChangeRequired
from clubfinance.auth.session import SessionRegistry
from clubfinance.core.config import settings
from clubfinance.core.db import SessionLocal
from clubfinance.routers import audit as audit_router
from clubfinance.routers import auth as auth_router
from clubfinance.routers import closures as closures_router
from clubfinance.routers import dashboard as dashboard_router
from clubfinance.routers import expenses as expenses_router
from clubfinance.routers import fees as fees_router
from clubfinance.routers import members as members_router
from clubfinance.routers import vaquinhas as vaquinhas_router
from clubfinance.services.gateway import FinanceStore, GatewayError

app = FastAPI(title="Club Finance API", version="0.1.0")

logger = logging.getLogger(__name__)

app.state.finance_store = FinanceStore()
app.state.sessions = SessionRegistry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router)
app.include_router(dashboard_router.router)
app.include_router(fees_router.router)
app.include_router(closures_router.router)
app.include_router(vaquinhas_router.router)
app.include_router(expenses_router.router)
app.include_router(members_router.router)
app.include_router(audit_router.router)


@app.exception_handler(GatewayError)
async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "code": "backend_write_failed"},
    )


@app.exception_handler(PasswordChangeRequired)
async def handle_password_change_required(request: Request, exc: PasswordChangeRequired) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": "Password change required", "code": "password_change_required"},
    )


@app.on_event("startup")
def warm_finance_store() -> None:
    """Load the first snapshot so early readers are not served empty collections."""

    with SessionLocal() as session:
        app.state.finance_store.refresh(session)
    logger.info("finance_store_warmed", extra={"environment": settings.ENVIRONMENT})


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}
