import asyncio

from folio_admin.config.settings import Settings
from folio_admin.container import build_container
from folio_admin.logging.logger import Log


async def run(settings: Settings) -> None:
    """Build dependencies -> load the dashboard summary -> log it -> close."""
    container = await build_container(settings)
    try:
        summary = await container.dashboard.load()
        Log.info(
            "Dashboard loaded",
            projects=summary.total_projects,
            docs_published=summary.docs_published,
            certs_passed=summary.certs_passed,
        )
        for coverage in summary.section_coverage:
            Log.info(f"Section {coverage.slug}: {coverage.published_count} published page(s)")
        for item in summary.activities:
            Log.info(f"{item.at} {item.subtitle}: {item.title}")
    finally:
        await container.aclose()


def main() -> None:
    """Entry point: load settings, configure logging and check the backend."""
    settings = Settings()
    Log.configure(settings.log_level)
    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
