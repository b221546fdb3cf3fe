"""Server entry point: ``python -m crudkit.api`` or ``crudkit-serve``."""

from __future__ import annotations

import uvicorn

from crudkit.api.app import create_app
from crudkit.config import Config
from crudkit.utils import console


def main() -> None:
    """Run the API with uvicorn, configured from ``CRUDKIT_*`` variables."""
    config = Config.from_env()
    app = create_app(config)
    console.print(
        f"Server is running at [bold]http://{config.api.host}:{config.api.port}[/bold] "
        f"([dim]{config.api.backend} backend[/dim])"
    )
    uvicorn.run(app, host=config.api.host, port=config.api.port)


if __name__ == "__main__":
    main()
