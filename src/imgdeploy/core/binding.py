"""Base class for descriptors resolved exactly once."""
import enum

from attrs import define, field

from imgdeploy.core.errors import AlreadyBound


@enum.unique
class BindState(enum.Enum):
    """Lifecycle of a descriptor.

    Attributes:

    * `UNBOUND`: `bind` has not completed yet.
    * `BOUND`: `bind` completed and the descriptor cannot be resolved again.
    """

    UNBOUND = "UNBOUND"
    BOUND = "BOUND"


@define(kw_only=True, eq=False)
class Binding:
    """Tracks whether a descriptor has already been bound."""

    _state: BindState = field(default=BindState.UNBOUND, init=False)

    @property
    def state(self) -> BindState:
        """The current bind state."""
        return self._state

    def _check_unbound(self):
        if self._state is BindState.BOUND:
            raise AlreadyBound(f"{type(self).__name__} has already been bound")

    def _mark_bound(self):
        self._check_unbound()
        self._state = BindState.BOUND
