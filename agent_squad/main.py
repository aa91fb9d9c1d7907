"""FastAPI main application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import settings
from .db import DatabaseConnection
from .llm import LLMGateway
from .services import BackgroundTaskRunner, ChangeFeed, ConversationStore, Coordinator
from .utils.logger import init_app_logger
from .api.v1 import turns, conversations, personas
from .api import websocket


logger = init_app_logger(settings)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info("=" * 70)
    logger.info("Starting Agent Squad...")
    logger.info("=" * 70)

    logger.info("")
    logger.info("📡 Server Configuration:")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")
    logger.info(f"  Debug: {settings.debug}")
    logger.info(f"  Log Level: {settings.log_level}")
    logger.info(f"  Log File: {settings.log_file}")
    logger.info(f"  Database: {settings.database_path}")

    logger.info("")
    logger.info("🤖 LLM Configuration:")
    logger.info(f"  API Base: {settings.openai_api_base}")
    logger.info(f"  Model: {settings.openai_model}")
    logger.info(f"  Timeout: {settings.llm_timeout}s")
    logger.info(f"  API Key: {settings.masked_api_key()}")

    db_conn = DatabaseConnection(settings.database_path)
    store = ConversationStore(db_conn, ChangeFeed())
    runner = BackgroundTaskRunner()
    coordinator = Coordinator(
        store=store,
        gateway=LLMGateway.from_settings(settings),
        runner=runner,
        build_turn_delay=settings.build_turn_delay,
        title_max_length=settings.title_max_length
    )

    # Inject dependencies into routers
    turns.coordinator = coordinator
    conversations.store = store
    websocket.store = store

    logger.info("")
    logger.info("=" * 70)
    logger.info("✅ Agent Squad started successfully!")
    logger.info(f"📍 Access at: http://{settings.host}:{settings.port}")
    logger.info(f"📚 API Docs: http://{settings.host}:{settings.port}/docs")
    logger.info("=" * 70)

    yield

    # Shutdown
    logger.info("Shutting down Agent Squad...")
    await runner.shutdown()
    await store.change_feed.shutdown()
    db_conn.close()
    logger.info("✅ Agent Squad shut down successfully")


app = FastAPI(
    title="Agent Squad",
    description="Multi-agent development chat backend",
    version=VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(turns.router)
app.include_router(conversations.router)
app.include_router(personas.router)
app.include_router(websocket.router)


@app.get("/health")
async def health():
    """
    Simple health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": "Agent Squad",
        "version": VERSION
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "agent_squad.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
