from __future__ import annotations

import uvicorn

from service.settings import ServiceSettings


def main() -> None:
    settings = ServiceSettings()
    uvicorn.run("service.api:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
