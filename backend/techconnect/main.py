"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from techconnect.api import admin, announcements, auth, ops
from techconnect.api.errors import install_error_handlers
from techconnect.api.middleware_request_id import RequestIdMiddleware
from techconnect.domain.announcements.service import build_stores
from techconnect.infra import postgres
from techconnect.infra.schema import ensure_schema
from techconnect.obs import init as obs_init
from techconnect.settings import settings

stores = build_stores(settings.club_namespaces)


@asynccontextmanager
async def lifespan(app: FastAPI):
	settings.ensure_production_ready()
	pool = await postgres.init_pool()
	if pool is not None:
		await ensure_schema(pool, stores.values())
	try:
		yield
	finally:
		await postgres.close_pool()


app = FastAPI(title="TechConnect API", lifespan=lifespan)
install_error_handlers(app)

allow_origins = list(settings.cors_allow_origins)
if not allow_origins:
	allow_origins = ["http://localhost:3000", "http://localhost:5173"] if settings.is_dev() else []

# The SPA sends the bearer header with credentials enabled, so origins must be explicit.
if "*" in allow_origins:
	allow_origins = [origin for origin in allow_origins if origin != "*"]

app.add_middleware(
	CORSMiddleware,
	allow_origins=allow_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

obs_init(app)
# Ensure every request carries an X-Request-Id and make it available on request.state
app.add_middleware(RequestIdMiddleware)

app.include_router(auth.router, tags=["identity"])
app.include_router(admin.router)
for store in stores.values():
	app.include_router(announcements.build_router(store))
app.include_router(ops.router, tags=["ops"])
