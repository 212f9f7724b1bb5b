# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Package scanner for auto-discovering ``@mapper_bean`` classes."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
import types

import structlog

from flymap.container.registry import MapperBeanRegistry
from flymap.container.stereotypes import is_mapper_bean
from flymap.kernel.exceptions import BeanRegistrationException

logger = structlog.get_logger("flymap.container.scanner")


def scan_package(package_name: str, registry: MapperBeanRegistry) -> int:
    """Scan a package for ``@mapper_bean`` classes and register them.

    Args:
        package_name: Dotted package name to scan (e.g. "myapp.mappers").
        registry: Registry to register discovered classes into.

    Returns:
        Number of classes registered.

    Raises:
        BeanRegistrationException: If *package_name* cannot be imported.
    """
    try:
        module = importlib.import_module(package_name)
    except ImportError as exc:
        raise BeanRegistrationException(
            f"Cannot scan mapper beans in '{package_name}': {exc}",
            code="BEAN_REGISTRATION_ERROR",
            context={"package": package_name},
        ) from exc

    count = _register_from_module(module, registry)

    # If it's a package, scan submodules
    if hasattr(module, "__path__"):
        for _importer, modname, _ispkg in pkgutil.walk_packages(module.__path__, prefix=module.__name__ + "."):
            try:
                submodule = importlib.import_module(modname)
            except ImportError as exc:
                logger.warning("mapper_bean_module_skipped", module=modname, error=str(exc))
                continue
            count += _register_from_module(submodule, registry)

    logger.debug("mapper_bean_scan_complete", package=package_name, registered=count)
    return count


def scan_module_classes(module: types.ModuleType) -> list[type]:
    """Extract the ``@mapper_bean`` classes defined in *module* itself."""
    return [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if is_mapper_bean(obj) and obj.__module__ == module.__name__
    ]


def _register_from_module(module: types.ModuleType, registry: MapperBeanRegistry) -> int:
    classes = scan_module_classes(module)
    for cls in classes:
        registry.register(cls)
    return len(classes)
