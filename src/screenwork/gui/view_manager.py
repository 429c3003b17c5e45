"""
View resolution: turns a view-model into the widget that displays it.

Lookup order for a view-model type ``FooViewModel``:
1. an explicit ``register(FooViewModel, FooView)`` mapping
2. ``FooView`` in the view-model's own module
3. ``FooView`` in the sibling views module (``app.viewmodels`` -> ``app.views``)
4. ``FooView`` in any of the configured ``view_modules``

Base classes of the view-model are tried in MRO order, so a subclass without
a dedicated view reuses its parent's.
"""

import importlib
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from ..core.errors import ViewNotFoundError
from ..core.lifecycle import ViewAware

logger = logging.getLogger(__name__)

VIEW_MODEL_SUFFIX = "ViewModel"
VIEW_SUFFIX = "View"


@runtime_checkable
class ViewModelBindable(Protocol):
    """A view able to receive its view-model (Qt has no DataContext)."""

    def bind_view_model(self, view_model: Any) -> None: ...


class ViewResolver(Protocol):
    def resolve_view(self, view_model: Any) -> Any: ...


class ViewManager:
    """Default ViewResolver: convention-based lookup plus explicit registrations."""

    def __init__(
        self,
        view_factory: Optional[Callable[[type], Any]] = None,
        view_modules: Iterable[str] = (),
    ):
        self.view_factory = view_factory or (lambda view_type: view_type())
        self.view_modules: List[str] = list(view_modules)
        self._registry: Dict[type, type] = {}

    def register(self, view_model_type: type, view_type: type) -> None:
        self._registry[view_model_type] = view_type

    def resolve_view(self, view_model: Any) -> Any:
        """Return the view for *view_model*, creating and binding it if necessary.

        Idempotent per view-model: an attached view is returned as-is.
        """
        if isinstance(view_model, ViewAware) and view_model.view is not None:
            logger.debug("ViewModel %r already has a View attached; reusing it", view_model)
            return view_model.view

        view_type = self.locate_view_for_model(type(view_model))
        view = self.view_factory(view_type)
        logger.info("Created View %s for ViewModel %r", type(view).__name__, view_model)
        self.bind_view_to_model(view, view_model)
        return view

    # Long-form alias
    create_and_bind_view_for_model_if_necessary = resolve_view

    def bind_view_to_model(self, view: Any, view_model: Any) -> None:
        if isinstance(view, ViewModelBindable):
            view.bind_view_model(view_model)
        if isinstance(view_model, ViewAware):
            view_model.attach_view(view)

    def locate_view_for_model(self, view_model_type: type) -> type:
        searched: List[str] = []
        for candidate in view_model_type.__mro__:
            if candidate is object:
                break
            view_type = self._registry.get(candidate)
            if view_type is not None:
                return view_type
            view_type = self._locate_by_convention(candidate, searched)
            if view_type is not None:
                return view_type

        error = ViewNotFoundError(view_model_type, searched)
        logger.error(str(error))
        raise error

    def _locate_by_convention(self, view_model_type: type, searched: List[str]) -> Optional[type]:
        name = view_model_type.__name__
        if not name.endswith(VIEW_MODEL_SUFFIX):
            return None
        view_name = name[: -len(VIEW_MODEL_SUFFIX)] + VIEW_SUFFIX

        for module_name in self._candidate_modules(view_model_type.__module__):
            searched.append(f"{module_name}.{view_name}")
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                # Only a missing candidate is expected; broken imports inside it are not
                if e.name != module_name:
                    raise
                continue
            view_type = getattr(module, view_name, None)
            if isinstance(view_type, type):
                return view_type
        return None

    def _candidate_modules(self, module_name: str) -> List[str]:
        candidates = [module_name]
        parts = module_name.split(".")
        if parts[-1] == "viewmodels":
            candidates.append(".".join(parts[:-1] + ["views"]))
        elif parts[-1].endswith("_viewmodel"):
            candidates.append(".".join(parts[:-1] + [parts[-1][: -len("_viewmodel")] + "_view"]))
        for extra in self.view_modules:
            if extra not in candidates:
                candidates.append(extra)
        return candidates
