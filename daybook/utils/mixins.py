from typing import cast

import structlog


class LoggerMixin:
    """Mixin class to add logging capabilities to any class"""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Logger named after the concrete class (``daybook.Injector``...)"""
        return cast(
            "structlog.stdlib.BoundLogger",
            structlog.get_logger(f"daybook.{self.__class__.__name__}"),
        )
