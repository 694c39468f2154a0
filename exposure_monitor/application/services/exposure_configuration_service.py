"""Exposure configuration resolution.

Resolves the scoring configuration handed to the matching capability.
Resolution never fails; the first tier that yields a usable document wins:

1. Remote: download from the diagnosis backend, validate against the
   bundled JSON schema, cache locally, use it.
2. Cached: the last configuration that passed validation.
3. Bundled: the default shipped with the package.

Each remote failure kind (parse, schema, network) is logged under its own
event name so they can be told apart.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jsonschema
from structlog import get_logger

from exposure_monitor.domain.errors import ExposureConfigurationValidationError
from exposure_monitor.domain.models import ExposureConfiguration

if TYPE_CHECKING:
    from exposure_monitor.application.ports import (
        DiagnosisBackendProtocol,
        KeyValueStorageProtocol,
    )

logger = get_logger(__name__)

EXPOSURE_CONFIGURATION_KEY = "exposureConfiguration"

CONFIG_DIR = Path(__file__).parent.parent.parent / "config"
DEFAULT_CONFIGURATION_PATH = CONFIG_DIR / "exposure_configuration_default.json"
CONFIGURATION_SCHEMA_PATH = CONFIG_DIR / "exposure_configuration_schema.json"


def load_default_configuration() -> ExposureConfiguration:
    """Load the configuration bundled with the package."""
    document = json.loads(DEFAULT_CONFIGURATION_PATH.read_text(encoding="utf-8"))
    return ExposureConfiguration.from_dict(document)


def load_configuration_schema() -> dict[str, Any]:
    """Load the JSON schema remote configurations are validated against."""
    return json.loads(CONFIGURATION_SCHEMA_PATH.read_text(encoding="utf-8"))


class ExposureConfigurationValidator:
    """Validates configuration documents against a JSON schema.

    Example:
        >>> validator = ExposureConfigurationValidator(load_configuration_schema())
        >>> validator.validate(load_default_configuration().to_dict())
    """

    def __init__(self, schema: dict[str, Any]) -> None:
        jsonschema.Draft7Validator.check_schema(schema)
        self._validator = jsonschema.Draft7Validator(schema)

    def validate(self, document: Any) -> None:
        """Validate document, reporting the most relevant mismatch.

        Raises:
            ExposureConfigurationValidationError: If document does not match.
        """
        error = jsonschema.exceptions.best_match(self._validator.iter_errors(document))
        if error is None:
            return
        path = "/".join(str(part) for part in error.absolute_path)
        raise ExposureConfigurationValidationError(reason=error.message, path=path) from error


class ExposureConfigurationService:
    """Resolves the exposure configuration with a three-tier fallback.

    Example:
        >>> service = ExposureConfigurationService(backend=backend, storage=storage)
        >>> configuration = await service.get_exposure_configuration()
        >>> configuration.minimum_exposure_duration_minutes
        15
    """

    def __init__(
        self,
        backend: DiagnosisBackendProtocol,
        storage: KeyValueStorageProtocol,
        validator: ExposureConfigurationValidator | None = None,
        default_configuration: ExposureConfiguration | None = None,
    ) -> None:
        """Initialize the configuration service.

        Args:
            backend: Diagnosis backend serving the remote configuration.
            storage: Key/value store holding the cached configuration.
            validator: Schema validator. Defaults to the bundled schema.
            default_configuration: Last-resort configuration. Defaults to the
                bundled default.
        """
        self._backend = backend
        self._storage = storage
        self._validator = validator or ExposureConfigurationValidator(
            load_configuration_schema()
        )
        self._default_configuration = default_configuration or load_default_configuration()

    async def get_exposure_configuration(self) -> ExposureConfiguration:
        """Return the best available configuration. Never raises."""
        try:
            document = await self._backend.get_exposure_configuration()
            self._validator.validate(document)
            configuration = ExposureConfiguration.from_dict(document)
        except json.JSONDecodeError as exc:
            logger.warning("exposure_configuration_parse_error", error=str(exc))
            return await self._get_alternate_exposure_configuration()
        except ExposureConfigurationValidationError as exc:
            logger.warning(
                "exposure_configuration_schema_error", path=exc.path, reason=exc.reason
            )
            return await self._get_alternate_exposure_configuration()
        except Exception as exc:
            logger.warning("exposure_configuration_network_error", error=str(exc))
            return await self._get_alternate_exposure_configuration()

        logger.info("exposure_configuration_downloaded")
        await self._cache_configuration(configuration)
        return configuration

    async def _cache_configuration(self, configuration: ExposureConfiguration) -> None:
        try:
            await self._storage.set_item(
                EXPOSURE_CONFIGURATION_KEY, json.dumps(configuration.to_dict())
            )
        except Exception:
            logger.exception("exposure_configuration_cache_write_failed")
            return
        logger.debug("exposure_configuration_cached")

    async def _get_alternate_exposure_configuration(self) -> ExposureConfiguration:
        """Use the cached configuration, or the bundled default if there is none."""
        try:
            cached = await self._storage.get_item(EXPOSURE_CONFIGURATION_KEY)
            if cached:
                configuration = ExposureConfiguration.from_dict(json.loads(cached))
                logger.info("exposure_configuration_from_cache")
                return configuration
            logger.info("exposure_configuration_cache_empty")
        except Exception as exc:
            logger.warning("exposure_configuration_cache_unusable", error=str(exc))
        logger.info("exposure_configuration_from_default")
        return self._default_configuration
