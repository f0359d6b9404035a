"""FastAPI application with lifespan and health endpoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from expense_bot.config import get_settings
from expense_bot.logging_config import configure_logging
from expense_bot.slack.router import router as slack_router
from expense_bot.store import reset_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and load config on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    yield
    reset_engine()


app = FastAPI(
    title="Expense Bot",
    lifespan=lifespan,
)
app.include_router(slack_router)


@app.get("/health")
async def health():
    """Health check endpoint for the hosting platform and local development."""
    return {
        "status": "ok",
        "service": "expense-bot",
        "version": "0.1.0",
    }
