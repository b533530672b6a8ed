from typing import Any, Dict, List, Optional, Type
import importlib
import logging
import pkgutil
from pathlib import Path

from .entrypoint import AgentContext, BaseEntrypoint

logger = logging.getLogger(__name__)


class EntrypointRegistry:
    _instance: Optional["EntrypointRegistry"] = None
    _entrypoints: Dict[str, Type[BaseEntrypoint]] = {}

    def __new__(cls) -> "EntrypointRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def register(cls, key: str, entrypoint_class: Type[BaseEntrypoint]) -> None:
        if not isinstance(entrypoint_class, type) or not issubclass(entrypoint_class, BaseEntrypoint):
            raise ValueError(f"Entrypoint {entrypoint_class} must inherit from BaseEntrypoint")
        if key in cls._entrypoints and cls._entrypoints[key] is not entrypoint_class:
            logger.warning(f"Entrypoint {key!r} re-registered by {entrypoint_class.__name__}")
        entrypoint_class.key = key
        cls._entrypoints[key] = entrypoint_class

    @classmethod
    def clear(cls) -> None:
        cls._entrypoints.clear()

    @classmethod
    def get_entrypoint(cls, key: str) -> Optional[Type[BaseEntrypoint]]:
        return cls._entrypoints.get(key)

    @classmethod
    def list_entrypoints(cls) -> List[str]:
        return list(cls._entrypoints.keys())

    @classmethod
    def create_entrypoint(cls, key: str, context: AgentContext) -> BaseEntrypoint:
        entrypoint_class = cls.get_entrypoint(key)
        if entrypoint_class is None:
            raise ValueError(f"Unknown entrypoint: {key}")
        return entrypoint_class(context)

    @classmethod
    def describe(cls, key: str) -> Dict[str, Any]:
        entrypoint_class = cls._entrypoints[key]
        return {
            "key": key,
            "description": entrypoint_class.description or (entrypoint_class.__doc__ or "").strip() or None,
            "price": entrypoint_class.price,
            "input_schema": entrypoint_class.input_model.model_json_schema(by_alias=True),
        }

    @classmethod
    def discover_entrypoints(cls, package_path: str = "calintel.entrypoints") -> None:
        try:
            package = importlib.import_module(package_path)
        except ImportError as e:
            logger.warning(f"Entrypoint package {package_path} not importable: {e}")
            return

        package_dir = Path(package.__file__).parent

        # Importing a module runs its @register_entrypoint decorators
        for _, module_name, _ in pkgutil.iter_modules([str(package_dir)]):
            module_path = f"{package_path}.{module_name}"
            try:
                importlib.import_module(module_path)
            except ImportError as e:
                logger.warning(f"Skipping entrypoint module {module_path}: {e}")

        logger.info(f"Discovered {len(cls._entrypoints)} entrypoints")


def register_entrypoint(key: str, price: int = 0, description: Optional[str] = None):
    def decorator(cls: Type[BaseEntrypoint]) -> Type[BaseEntrypoint]:
        cls.price = price
        if description is not None:
            cls.description = description
        EntrypointRegistry.register(key, cls)
        return cls
    return decorator
