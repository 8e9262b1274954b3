"""
Factory for creating short code generation strategies.
"""

from enum import Enum
from typing import Optional
from shortlink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    HashedUUIDShortCodeStrategy,
    RandomShortCodeStrategy
)
from shortlink_app.config import Settings, settings as default_settings


class ShortCodeStrategyType(Enum):
    """Available short code generation strategies"""
    HASHED_UUID = "hashed_uuid"
    RANDOM = "random"


class ShortCodeFactory:
    """Factory for creating short code generation strategies"""
    
    @classmethod
    def create_strategy(
        cls,
        strategy_type: Optional[ShortCodeStrategyType] = None,
        settings: Optional[Settings] = None
    ) -> ShortCodeStrategy:
        """
        Create a short code generation strategy.
        
        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.
            settings: Settings to read defaults from (module settings if None)
        
        Returns:
            A ShortCodeStrategy instance
        
        Raises:
            ValueError: If strategy_type is unknown
        """
        settings = settings or default_settings
        
        # Use default from settings if not specified
        if strategy_type is None:
            strategy_type = ShortCodeStrategyType(settings.short_code_strategy)
        
        if strategy_type == ShortCodeStrategyType.HASHED_UUID:
            return HashedUUIDShortCodeStrategy()
        elif strategy_type == ShortCodeStrategyType.RANDOM:
            return RandomShortCodeStrategy(length=settings.short_code_length)
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")
