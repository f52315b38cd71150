from typing import Generic, Callable, TypeVar, Hashable, ClassVar


K = TypeVar("K", bound=Hashable)
T = TypeVar("T")
TypeMap = dict[K, type[T]]


class TypeAbstractFactory(Generic[K, T]):
    """
    Maps keys (handler kinds, engine types) to implementation classes.
    Every subclass owns a separate registry, so MiddlewareFactory and
    TransportEngineFactory never see each other's keys.
    """

    _registry: ClassVar[TypeMap] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = {}

    @classmethod
    def register(cls, key: K) -> Callable[[type[T]], type[T]]:
        """
        Class decorator. Registering a second, different class under a key
        already taken is an error.
        """
        def wrapper(impl: type[T]) -> type[T]:
            existing = cls._registry.get(key)
            if existing is not None and existing is not impl:
                raise ValueError(
                    f"{cls.__name__}: {key!r} is already registered to {existing.__name__}"
                )
            cls._registry[key] = impl
            return impl

        return wrapper

    @classmethod
    def list_keys(cls) -> list[K]:
        return list(cls._registry.keys())

    @classmethod
    def lookup(cls, key: K) -> type[T]:
        try:
            return cls._registry[key]
        except KeyError:
            known = ", ".join(repr(k) for k in cls._registry) or "none"
            raise KeyError(f"{cls.__name__} has no implementation for {key!r} (registered: {known})") from None

    @classmethod
    def create(cls, key: K, *args, **kwargs) -> T:
        return cls.lookup(key)(*args, **kwargs)
