"""
Test Fixtures

Common service classes used across test modules
"""

from svcinjection import Taggable


class Logger:
    """Service with one constructor argument and one configuration method"""

    instances = 0

    def __init__(self, mode):
        Logger.instances += 1
        self.mode = mode
        self.params = []

    def set_param(self, value):
        self.params.append(value)


class Recorder:
    """Records constructor arguments and method calls in order"""

    def __init__(self, *args):
        self.args = list(args)
        self.calls = []

    def first(self, *args):
        self.calls.append(("first", list(args)))

    def second(self, *args):
        self.calls.append(("second", list(args)))

    def third(self, *args):
        self.calls.append(("third", list(args)))

    def attach(self, other):
        self.calls.append(("attach", other))


class CounterService:
    """Service with mutable state for testing singleton behavior"""

    def __init__(self):
        self.counter = 0

    def increment(self):
        self.counter += 1
        return self.counter


class FailingService:
    """Service whose constructor always fails"""

    def __init__(self, *args):
        raise RuntimeError("constructor failed")


class SearchEngine:
    """Base class of the search engines"""

    engine_name = None

    def __init__(self, mode=None):
        self.mode = mode

    def get_name(self):
        return self.engine_name

    def search(self, keywords):
        return f'{self.engine_name.capitalize()} search results of keywords: "{" ".join(keywords)}"'


class MysqlEngine(SearchEngine):
    engine_name = "mysql"


class SolrEngine(SearchEngine):
    engine_name = "solr"


class SphinxEngine(SearchEngine):
    engine_name = "sphinx"


class FailEngine:
    """Tagged service that is not a search engine"""

    def __init__(self, mode=None):
        self.mode = mode

    def get_name(self):
        return "fail"


class SearchService(Taggable):
    """Search service collecting every engine tagged with its name"""

    def __init__(self, engine_name):
        self.used_engine = engine_name
        self.engines = {}
        self.error = False

    def process_tagged_services(self, services):
        for service in services:
            if not isinstance(service, SearchEngine):
                self.error = True
                continue
            self.engines[service.get_name()] = service

    def set_used_engine(self, engine_name):
        self.used_engine = engine_name

    def get_used_engine(self):
        return self.engines[self.used_engine]

    def search(self, keywords):
        return self.get_used_engine().search(keywords)


class MySearch:
    """Service depending on another service through its constructor"""

    def __init__(self, search):
        self.search_service = search
        self.used_engine = None

    def set_used_engine(self, engine_name):
        self.used_engine = engine_name

    def search(self, keywords):
        return (
            f'Search words "{" ".join(keywords)}" using engine "{self.used_engine}". '
            f"(custom search)"
        )


class Collector(Taggable):
    """Taggable service remembering what it received"""

    def __init__(self, *args):
        self.args = list(args)
        self.tagged = None

    def process_tagged_services(self, services):
        self.tagged = list(services)


class Member:
    """Plain service used as a tag member"""

    def __init__(self, *args):
        self.args = list(args)
        self.owner = None

    def set_owner(self, owner):
        self.owner = owner
