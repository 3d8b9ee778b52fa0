import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 15.0
SEQUENTIAL_ECHO_LIMIT = 10


class LoadTestConfig(BaseModel):
    """Immutable settings for one load-test run, shared by every worker."""

    model_config = ConfigDict(frozen=True)

    targets: list[str] = Field(min_length=1)
    requests: int = Field(gt=0, description="Total number of requests (-n)")
    concurrency: int = Field(default=1, gt=0, description="Worker count (-c)")
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @property
    def effective_concurrency(self) -> int:
        # never more workers than jobs
        return min(self.concurrency, self.requests)

    @property
    def sequential(self) -> bool:
        return self.effective_concurrency == 1


def _describe(exc: ValidationError) -> str:
    flags = {"requests": "-n", "concurrency": "-c", "timeout_s": "--timeout", "targets": "targets"}
    parts = []
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else "config"
        parts.append(f"{flags.get(name, name)}: {err['msg']}")
    return "; ".join(parts)


def build_config(
    targets: list[str],
    requests: int | None,
    concurrency: int | None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> LoadTestConfig:
    if requests is None:
        raise ConfigurationError("Number of requests (-n) must be greater than 0")
    try:
        config = LoadTestConfig(
            targets=targets,
            requests=requests,
            concurrency=1 if concurrency is None else concurrency,
            timeout_s=timeout_s,
        )
    except ValidationError as e:
        raise ConfigurationError(_describe(e)) from e

    if config.effective_concurrency < config.concurrency:
        logger.debug(
            f"Clamping concurrency {config.concurrency} -> {config.effective_concurrency} "
            f"(only {config.requests} requests)"
        )
    return config
