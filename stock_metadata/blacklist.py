"""
Words and brand names that must never appear in generated keywords.
"""

from typing import Iterable, List

# Subjective, spam and generic words
BLACKLIST_WORDS = [
    # Subjective words
    'beautiful', 'gorgeous', 'stunning', 'amazing', 'awesome',
    'perfect', 'best', 'nice', 'good', 'great', 'wonderful',
    'lovely', 'pretty', 'cute', 'fantastic', 'incredible',
    'magnificent', 'superb', 'excellent', 'outstanding',

    # Technical spam words
    '4k', '8k', 'hd', 'uhd', 'high quality', 'high resolution',
    'professional', 'stock photo', 'royalty free', 'royalty-free',
    'stock image', 'stock photography', 'commercial use',

    # Meaningless for search
    'wallpaper', 'background image', 'copy space', 'negative space',
    'horizontal', 'vertical', 'square', 'landscape', 'portrait',

    # Copyright terms
    'copyright', 'watermark', 'logo', 'trademark', 'registered',

    # Generic terms
    'image', 'photo', 'picture', 'photograph', 'shot', 'scene',
]

# Brand and trademark names
BLACKLIST_BRANDS = [
    # Tech brands
    'iphone', 'samsung', 'apple', 'google', 'microsoft', 'adobe',
    'android', 'windows', 'macos', 'ios', 'linux', 'chrome',
    'facebook', 'instagram', 'twitter', 'tiktok', 'youtube',
    'whatsapp', 'telegram', 'snapchat', 'linkedin', 'pinterest',
    'netflix', 'spotify', 'amazon', 'ebay', 'alibaba',

    # Camera brands
    'canon', 'nikon', 'sony', 'fujifilm', 'panasonic', 'olympus',
    'leica', 'hasselblad', 'gopro', 'dji',

    # Fashion brands
    'nike', 'adidas', 'puma', 'reebok', 'gucci', 'louis vuitton',
    'chanel', 'dior', 'prada', 'hermes', 'zara', 'h&m',

    # Automotive brands
    'mercedes', 'bmw', 'audi', 'volkswagen', 'toyota', 'honda',
    'ford', 'chevrolet', 'tesla', 'porsche', 'ferrari', 'lamborghini',

    # Food & beverage brands
    'coca-cola', 'pepsi', 'starbucks', 'mcdonalds', 'burger king',
    'kfc', 'subway', 'dominos', 'pizza hut', 'dunkin',

    # Other major brands
    'ikea', 'walmart', 'target', 'costco', 'home depot',
    'disney', 'marvel', 'dc comics', 'nintendo', 'playstation', 'xbox',
]

FULL_BLACKLIST = frozenset(
    [word.lower() for word in BLACKLIST_WORDS] +
    [brand.lower() for brand in BLACKLIST_BRANDS]
)


def is_blacklisted(word: str) -> bool:
    """
    Check whether a word or phrase is blacklisted.

    Matching is case-insensitive and exact; substrings never match.
    """
    return word.lower() in FULL_BLACKLIST


def filter_blacklisted(words: Iterable[str]) -> List[str]:
    """Drop blacklisted entries, keeping the original order."""
    return [word for word in words if not is_blacklisted(word)]
