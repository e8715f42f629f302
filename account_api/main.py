"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import os

from dotenv import load_dotenv


def _dotenv_path() -> str:
    explicit = os.environ.get("DOTENV_CONFIG_PATH")
    if explicit:
        return explicit
    if os.environ.get("APP_ENV", "").strip().lower() == "prod":
        return ".env.production"
    return ".env.local"


load_dotenv(_dotenv_path(), override=True)

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from account_api.api import health
from account_api.api import router as api_router
from account_api.api.errors import install_exception_handlers
from account_api.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

app = FastAPI(
    title="Account Service API",
    version="1.0.0",
    docs_url="/api-docs",
    openapi_url="/api-docs.json",
    redoc_url="/redoc",
    swagger_ui_parameters={"persistAuthorization": True},
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(api_router, prefix=settings.API_PREFIX)

LANDING_PAGE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Account Service API</title>
    <style>
      body { margin: 0; font-family: "Segoe UI", Tahoma, Arial, sans-serif; background: #f1f5f9; color: #0f172a; }
      .card { max-width: 520px; margin: 15vh auto; background: #fff; border-radius: 16px; padding: 28px 32px;
              box-shadow: 0 10px 30px rgba(15, 23, 42, 0.12); }
      .btn { display: inline-block; background: #0f172a; color: #fff; padding: 12px 18px; border-radius: 10px;
             text-decoration: none; font-weight: 600; }
      .links a { color: #0f172a; margin-right: 12px; font-size: 14px; }
    </style>
  </head>
  <body>
    <div class="card">
      <h1>Account Service API</h1>
      <p>Open the Swagger UI to explore the endpoints.</p>
      <a class="btn" href="/api-docs">Open API Docs</a>
      <p class="links"><a href="/api-docs.json">OpenAPI JSON</a><a href="/ping">Health Check</a></p>
    </div>
  </body>
</html>
"""


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
def root() -> str:
    """Landing page linking the API docs and health check."""
    return LANDING_PAGE
