"""
Model Factory

The Factory class allows repeatable models to be instantiated quickly for
testing purposes.

To use it, subclass Factory and implement definition(). The definition acts
as the blueprint for your model; any field can be overridden when calling
make() or make_one(), and named states registered with state() are applied
on top of the overrides.

Example:
    class UserFactory(Factory[dict]):
        def definition(self) -> dict:
            return {'name': 'John Doe', 'email': 'john@example.com'}

        def verified(self) -> 'UserFactory':
            return self.state(lambda user: {**user, 'verified': True})

    Users = UserFactory()
    Users.count(3).verified().make(name='Jane')
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from modelfactory.config.factory_settings import FactorySettings, get_settings
from modelfactory.core.errors import (
    BuildError, ConfigurationError, InvalidArgumentError, StorageNotImplementedError
)
from modelfactory.utils.model_utils import collect_overrides, copy_model, merge_overrides

Model = TypeVar('Model')

StateCallback = Callable[[Any], Any]


class Factory(ABC, Generic[Model]):
    """
    Base class for model factories.

    Holds two pieces of transient state: the number of instances the next
    make() produces and the state callbacks registered since the last build.
    Both are reset after every make(), whether it succeeds or fails, so a
    single factory instance can be shared across tests.

    Instances are not safe for concurrent use; count(), state() and make()
    on the same factory from several threads race on the transient state.
    """

    def __new__(cls, *args, **kwargs):
        if cls is Factory:
            raise ConfigurationError('Abstract class cannot be instantiated directly.')

        missing = sorted(getattr(cls, '__abstractmethods__', ()))
        if missing:
            raise ConfigurationError(
                f"{cls.__name__} must implement: {', '.join(missing)}",
                details={'factory': cls.__name__, 'missing': missing}
            )

        return super().__new__(cls)

    def __init__(self, settings: Optional[FactorySettings] = None):
        """
        Initialize the factory.

        Args:
            settings: Optional settings, defaults to the global factory settings
        """
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._settings = settings if settings is not None else get_settings()
        self._state_callbacks: List[StateCallback] = []
        self._instances = 1

    @property
    def pending_count(self) -> int:
        """Number of instances the next make() will produce"""
        return self._instances

    @property
    def pending_states(self) -> Tuple[StateCallback, ...]:
        """State callbacks registered since the last build"""
        return tuple(self._state_callbacks)

    def count(self, amount: int) -> 'Factory[Model]':
        """
        Set the number of instances the next make() will produce.

        Raises:
            InvalidArgumentError: If amount is not a positive integer, or exceeds a configured max_count
        """
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise InvalidArgumentError(
                'Count must be an integer',
                details={'amount': amount}
            )
        if amount < 1:
            raise InvalidArgumentError(
                'Count must be greater than 0',
                details={'amount': amount}
            )
        max_count = self._settings.max_count
        if max_count is not None and amount > max_count:
            raise InvalidArgumentError(
                f"Count must not exceed {max_count}",
                details={'amount': amount, 'max_count': max_count}
            )

        self._instances = amount
        return self

    def state(self, callback: StateCallback) -> 'Factory[Model]':
        """
        Register a state callback to apply on the next make().

        Callbacks receive the model after overrides (and after any earlier
        callback) and must return the model to pass on.
        """
        if not callable(callback):
            raise InvalidArgumentError(
                'State must be callable',
                details={'type': type(callback).__name__}
            )

        self._state_callbacks.append(callback)
        return self

    def reset(self) -> 'Factory[Model]':
        """Clear registered states and set the count back to 1"""
        self._state_callbacks = []
        self._instances = 1
        return self

    def make(self, overrides: Optional[Mapping] = None, **fields: Any) -> List[Model]:
        """
        Make a set number of factory made models.

        Args:
            overrides: Mapping of fields to override on the blueprint
            **fields: Fields to override, these win over the mapping

        Returns:
            A list holding as many models as the pending count

        Raises:
            BuildError: If the blueprint or a state callback fails
        """
        instances = self._instances
        callbacks = list(self._state_callbacks)
        copy_mode = self._settings.copy_mode

        try:
            combined = collect_overrides(overrides, fields)
            output: List[Model] = []

            for _ in range(instances):
                try:
                    model = copy_model(self.definition(), copy_mode)
                    model = merge_overrides(model, copy_model(combined, copy_mode))

                    # Apply state callbacks in order
                    for callback in callbacks:
                        model = callback(model)
                except Exception as e:
                    self._logger.error(f"Failed to make {self.__class__.__name__}: {type(e).__name__}: {e}")
                    raise BuildError(
                        f"Failed to make model: {e}",
                        original=e,
                        details={'factory': self.__class__.__name__, 'error_type': type(e).__name__}
                    ) from e

                output.append(model)

            self._logger.debug(
                f"Made {instances} {self.__class__.__name__} model(s) with {len(callbacks)} state(s)"
            )
            return output
        finally:
            self.reset()

    def make_one(self, overrides: Optional[Mapping] = None, **fields: Any) -> Model:
        """Make a single instance and return it directly instead of in a list"""
        return self.make(overrides, **fields)[0]

    def create(self, overrides: Optional[Mapping] = None, **fields: Any) -> List[Model]:
        """
        Create and store a set number of factory made models.

        No storage layer exists yet, so this always raises without touching
        the blueprint or the pending count and states.

        Raises:
            StorageNotImplementedError: Always
        """
        raise StorageNotImplementedError(
            'Must implement the DB layer to use Create.',
            details={'factory': self.__class__.__name__}
        )

    def create_one(self, overrides: Optional[Mapping] = None, **fields: Any) -> Model:
        """Create a single instance and store it"""
        return self.create(overrides, **fields)[0]

    build_many = make
    build_one = make_one
    persist_many = create
    persist_one = create_one

    @abstractmethod
    def definition(self) -> Model:
        """
        Return a fresh blueprint for the model.

        Called once per model produced, so values computed here (timestamps,
        new lists) are never shared between models of a batch.
        """
