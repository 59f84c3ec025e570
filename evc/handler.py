import logging
from typing import Any, Callable, Optional

from .cache import DEFAULT_NAMESPACE, MemoryCache, cache_key
from .compiler import transpile

logger = logging.getLogger(__name__)


def passthrough(template, source: str) -> str:
    return source


class TemplateHandler:
    """
    Turns an EVC template into the downstream engine's compiled form.

    `template` is any object with `source` and `identifier` attributes.
    `downstream` receives the template and the transpiled ERB text and returns
    whatever the host engine compiles it to; by default the ERB text itself.
    Results are cached per identifier and source fingerprint unless
    `development` is set.
    """

    def __init__(self, cache=None, downstream: Optional[Callable[[Any, str], Any]] = None,
                 namespace: str = DEFAULT_NAMESPACE, development: bool = False):
        self.cache_store = cache if cache is not None else MemoryCache()
        self.downstream = downstream or passthrough
        self.namespace = namespace
        self.development = development

    def cache_key_for(self, template, source: str) -> str:
        return cache_key(self.namespace, template.identifier, source)

    def call(self, template, source: Optional[str] = None):
        if source is None:
            source = template.source

        key = None
        if not self.development:
            key = self.cache_key_for(template, source)
            cached = self.cache_store.read(key)
            if cached is not None:
                logger.debug("Cache hit for %s", template.identifier)
                return cached
            logger.debug("Cache miss for %s", template.identifier)

        result = self.downstream(template, transpile(source))

        if key is not None:
            self.cache_store.write(key, result)
        return result

    __call__ = call
