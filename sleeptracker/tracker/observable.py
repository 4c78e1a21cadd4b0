from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")

Observer = Callable[[T], None]


class Observable(Generic[T]):
    """
    A value holder that pushes every new value to its subscribers.
    Subscribers get the current value as soon as they subscribe.
    """

    def __init__(self, value: T):
        self._value = value
        self._observers: List[Observer] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for observer in list(self._observers):
            observer(value)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register observer and return a callable that removes it again."""
        self._observers.append(observer)
        observer(self._value)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def map(self, fn: Callable[[T], R]) -> "Observable[R]":
        """Derived observable that holds fn(value) and follows every change of this one."""
        derived: Observable[R] = Observable(fn(self._value))
        self._observers.append(lambda value: derived.set(fn(value)))
        return derived
