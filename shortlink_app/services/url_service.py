import logging

from shortlink_app.exceptions import CollisionError, CodeGenerationError, InvalidTargetURLError
from shortlink_app.schemas.url import UrlMapping
from shortlink_app.services.short_code_strategies import ShortCodeStrategy
from shortlink_app.storage.strategies import UrlStore

logger = logging.getLogger(__name__)


class URLService:
    """
    URL Service composing a code generator and a URL store.
    
    Both collaborators are injected (not created internally), so the
    application decides which backend and strategy are used and tests
    can pass their own.
    """
    
    def __init__(
        self,
        store: UrlStore,
        generator: ShortCodeStrategy,
        max_retries: int = 5
    ):
        """
        Initialize URL service with dependencies.
        
        Args:
            store: URL store that owns the mappings
            generator: Short code generation strategy
            max_retries: Attempts before giving up on collisions
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_retries}")
        self.store = store
        self.generator = generator
        self.max_retries = max_retries

    async def shorten(self, target_url: str) -> UrlMapping:
        """Create a new mapping for target_url under a fresh code.
        
        Every call creates a new code, even for a URL shortened before.
        
        On CollisionError a new code is generated and the insert retried,
        up to max_retries attempts in total. PersistenceError is not
        retried and propagates to the caller.
        
        Raises:
            InvalidTargetURLError: target_url is empty
            CodeGenerationError: every attempt collided
        """
        if not target_url:
            raise InvalidTargetURLError("Target URL must not be empty")
        
        for attempt in range(1, self.max_retries + 1):
            code = self.generator.generate()
            try:
                mapping = await self.store.put(code, target_url)
            except CollisionError:
                logger.warning(
                    "Short code collision on '%s' (attempt %d/%d)",
                    code, attempt, self.max_retries
                )
                continue
            
            logger.debug("Shortened %s -> %s", target_url, code)
            return mapping
        
        raise CodeGenerationError(self.max_retries)

    async def resolve(self, code: str) -> str:
        """Target URL for a code; NotFoundError if it was never issued"""
        return await self.store.get(code)

    async def describe(self, code: str) -> UrlMapping:
        return await self.store.get_mapping(code)
