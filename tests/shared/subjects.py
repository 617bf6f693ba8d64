"""Subject classes for morphotest tests."""

from abc import ABC, abstractmethod


class Counter:
    """Counter with a protected helper and a private total."""

    def __init__(self, start: int = 0):
        self.__total = start
        self._history = []

    def _add(self, a, b):
        return a + b

    def _increment(self, step: int = 1):
        self.__total += step
        self._history.append(step)
        return self.__total

    def __reset(self):
        self.__total = 0
        return "reset"

    def _append_to(self, items, value):
        items.append(value)
        return len(items)

    def _fill(self, *buckets):
        for bucket in buckets:
            bucket["filled"] = True
        return len(buckets)

    def current(self):
        return self.__total


class ConstructorSideEffect:
    """Records every constructor run on the class."""

    constructed = 0

    def __init__(self, fail: bool = True):
        ConstructorSideEffect.constructed += 1
        self.initialized = True
        if fail:
            raise RuntimeError("constructor must not run")

    def _answer(self):
        return 42


class AbstractGreeter(ABC):
    """Abstract class with one concrete protected method."""

    def __init__(self, greeting: str = "Hello"):
        self._greeting = greeting

    @abstractmethod
    def name(self) -> str:
        pass

    def _greet(self):
        return f"{self._greeting}, {self.name()}!"


class MailService:
    """Dependency used for injection tests."""

    def send(self, to):
        return f"sent to {to}"


class SetterAndInjectorService:
    """Offers both ``setMailer`` and ``injectMailer``."""

    def __init__(self):
        self._mailer = None
        self.used = None

    def setMailer(self, mailer):
        self._mailer = mailer
        self.used = "setter"

    def injectMailer(self, mailer):
        self._mailer = mailer
        self.used = "injector"


class InjectorService:
    """Offers ``injectMailer`` and a plain ``mailer`` attribute."""

    def __init__(self):
        self.mailer = None
        self.used = None

    def injectMailer(self, mailer):
        self.mailer = mailer
        self.used = "injector"


class SnakeCaseService:
    def __init__(self):
        self._repository = None
        self.used = None

    def set_repository(self, repository):
        self._repository = repository
        self.used = "setter"


class FieldOnlyService:
    """Only a private attribute, no setter."""

    def __init__(self):
        self.__mailer = None

    def get_mailer(self):
        return self.__mailer


class SlottedPoint:
    __slots__ = ("x", "__y")

    def __init__(self, x=0, y=0):
        self.x = x
        self.__y = y

    def get_y(self):
        return self.__y


class ClonableDocument:
    """Counts ``__copy__`` calls."""

    copies = 0

    def __init__(self, title="draft"):
        self.title = title

    def __copy__(self):
        ClonableDocument.copies += 1
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        return clone


class Fetcher:
    """Private ``__cache`` next to a public ``cache()`` accessor."""

    def __init__(self):
        self.__cache = {}

    def cache(self):
        return self.__cache

    def __fetch(self):
        return "real"

    def run(self):
        return self.__fetch()


class AnnotatedService:
    """Declares its private client without ever assigning it."""

    __client: object

    def get_client(self):
        return self.__client


class Dispatcher:
    """Defines its own ``call`` and relies on it internally."""

    def call(self, target):
        return f"dispatched {target}"

    def _ping(self):
        return "pong"

    def run(self):
        return self.call("_ping")
