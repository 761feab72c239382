from dataclasses import dataclass
from pathlib import Path

import structlog
from dotenv import dotenv_values
from sqlalchemy.exc import ArgumentError
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config import settings
from services.catalog_service.seed import seed_catalog
from services.catalog_service.service import ProductService
from .runner import ScriptRunner

logger = structlog.get_logger(__name__)

MISSING_URL = "Not Found in .env"
MISSING_SHADOW_URL = "Not Found or Not Set"


class CatalogNotEmptyError(Exception):
    pass


@dataclass
class DemoPaths:
    env_path: Path
    feature_marker: Path
    demo_dir: Path
    manager_script: Path


def get_demo_paths() -> DemoPaths:
    return DemoPaths(
        env_path=settings.BACKEND_ENV_PATH,
        feature_marker=settings.FEATURE_MARKER_PATH,
        demo_dir=settings.DEMO_DIR,
        manager_script=settings.DEMO_MANAGER_SCRIPT,
    )


def describe_database(url: str) -> str:
    if url == MISSING_URL:
        return "Could not parse Main URL (URL missing)"
    try:
        parsed = make_url(url)
    except (ArgumentError, ValueError):
        return "Could not parse Main URL (Invalid format)"
    return f"Connected to {parsed.host}:{parsed.port} (DB: {parsed.database})"


class DemoControlService:

    @staticmethod
    def read_status(paths: DemoPaths) -> dict:
        if not paths.env_path.exists():
            return {
                "current_database": f".env file not found at {paths.env_path}",
                "raw_db_url": MISSING_URL,
                "raw_shadow_db_url": MISSING_SHADOW_URL,
            }

        env = dotenv_values(paths.env_path)
        db_url = env.get("DATABASE_URL") or MISSING_URL
        return {
            "current_database": describe_database(db_url),
            "raw_db_url": db_url,
            "raw_shadow_db_url": env.get("SHADOW_DATABASE_URL") or MISSING_SHADOW_URL,
        }

    @staticmethod
    def is_feature_applied(paths: DemoPaths) -> bool:
        # A single marker file records the applied feature branch
        return paths.feature_marker.exists()

    @staticmethod
    async def manage_feature(runner: ScriptRunner, paths: DemoPaths, action: str, feature_name: str) -> str:
        output = await runner.run(
            str(paths.manager_script), action, feature_name, cwd=paths.demo_dir
        )
        logger.info("feature_managed", action=action, feature=feature_name)
        return (
            f"Initiating file {action} for '{feature_name}'...\n"
            f"File script output:\n{output}\n"
        )

    @staticmethod
    async def switch_db(runner: ScriptRunner, paths: DemoPaths, main_url: str, shadow_url: str) -> str:
        output = await runner.run(
            str(paths.manager_script), "switch-db", main_url, shadow_url or "", cwd=paths.demo_dir
        )
        logger.info("database_switched", target=describe_database(main_url))
        return output

    @staticmethod
    async def run_seed(db: AsyncSession) -> str:
        if await ProductService.count_products(db) > 0:
            raise CatalogNotEmptyError("Database is not empty. Seed command aborted.")
        counts = await seed_catalog(db)
        return f"Seeded {counts['categories']} categories and {counts['products']} products."
