from pydantic import BaseModel, ConfigDict, model_validator

from service.wxchart.base import constants as bc

from . import catalog


class SelectionState(BaseModel):
    """Immutable snapshot of the user's series selection.

    order holds the selected categories in the order they were first
    selected. Its positions ("slots") determine axis placement.
    visible holds the ids of all visible metrics.
    """

    order: tuple[str, ...] = ()
    visible: frozenset[str] = frozenset()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_order(self) -> "SelectionState":
        if len(set(self.order)) != len(self.order):
            raise ValueError(f"Duplicate categories in selection order: {self.order}")
        if len(self.order) > bc.MAX_ACTIVE_CATEGORIES:
            raise ValueError(
                f"At most {bc.MAX_ACTIVE_CATEGORIES} categories can be selected, got {self.order}"
            )
        return self

    def is_visible(self, metric_id: str) -> bool:
        return metric_id in self.visible

    def visibility_map(self) -> dict[str, bool]:
        """Returns a metric id -> visibility dict for all catalog metrics."""
        return {m: m in self.visible for m in catalog.METRICS}

    def slot_of(self, category_id: str) -> int | None:
        try:
            return self.order.index(category_id)
        except ValueError:
            return None

    def with_visibility(self, metric_ids, value: bool) -> "SelectionState":
        ids = frozenset(metric_ids)
        visible = self.visible | ids if value else self.visible - ids
        return self.model_copy(update={"visible": visible})

    def with_category(self, category_id: str) -> "SelectionState":
        """Appends category_id to the order, unless it is already present."""
        if category_id in self.order:
            return self
        # Go through the constructor so the order invariants get validated.
        return SelectionState(order=self.order + (category_id,), visible=self.visible)

    def without_category(self, category_id: str) -> "SelectionState":
        """Removes category_id from the order. Later entries shift left."""
        if category_id not in self.order:
            return self
        order = tuple(c for c in self.order if c != category_id)
        return self.model_copy(update={"order": order})


EMPTY = SelectionState()
