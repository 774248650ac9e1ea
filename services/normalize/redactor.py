"""
PII Redaction Module
Removes personally identifiable information from feature request text
"""

import re
from typing import Optional, Pattern


EMAIL_TAG = "[EMAIL_REDACTED]"
PHONE_TAG = "[PHONE_REDACTED]"
PAYMENT_TAG = "[PAYMENT_INFO_REDACTED]"
SSN_TAG = "[SSN_REDACTED]"


class PIIRedactor:
    """
    Redacts personally identifiable information from text.

    Patterns redacted:
    - Email addresses
    - Payment card numbers (4-4-4-4 digit blocks)
    - National ID numbers (3-2-4 digit blocks)
    - Phone numbers (optional country code, optional area code)

    Email runs first because local-parts can hold digit runs. Card and ID
    shapes run before the phone pattern, which would otherwise swallow
    their leading digits.
    """

    # Tags hold no digits and no "@", so each sweep strictly shrinks the
    # set of candidate matches.
    MAX_SWEEPS = 8

    def __init__(self):
        self._patterns = self._compile_patterns()

    def _compile_patterns(self) -> list[tuple[str, Pattern, str]]:
        """Compile regex patterns for PII detection"""
        # Order matters: card and SSN run before phone, otherwise the phone
        # pattern claims 16-digit cards and they never get the payment tag.
        return [
            ("EMAIL", re.compile(
                r'[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}'
            ), EMAIL_TAG),

            ("PAYMENT", re.compile(
                r'\b\d{4}[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b'
            ), PAYMENT_TAG),

            ("SSN", re.compile(
                r'\b\d{3}[-\s]?\d{2}[-\s]?\d{4}\b'
            ), SSN_TAG),

            # Broad on purpose: also catches long digit runs such as
            # compact dates or order numbers.
            ("PHONE", re.compile(
                r'(?:\+?\d{1,3}[-.\s]?)?(?:\(?\d{3}\)?[-.\s]?)?\d{3}[-.\s]?\d{4}'
            ), PHONE_TAG),
        ]

    @property
    def patterns(self) -> list[tuple[str, Pattern]]:
        return [(name, pattern) for name, pattern, _ in self._patterns]

    def redact(self, text: Optional[str]) -> str:
        """
        Redact PII from text.

        Args:
            text: Input text potentially containing PII

        Returns:
            Text with PII replaced by fixed tags, "" for empty input
        """
        redacted, _ = self.redact_with_stats(text)
        return redacted

    def redact_with_stats(self, text: Optional[str]) -> tuple[str, dict[str, int]]:
        """
        Redact PII and return statistics.

        Returns:
            Tuple of (redacted_text, {pattern_name: count})
        """
        if not text:
            return "", {}

        stats: dict[str, int] = {}
        redacted = text

        for _ in range(self.MAX_SWEEPS):
            changed = False
            for name, pattern, tag in self._patterns:
                redacted, count = pattern.subn(tag, redacted)
                if count:
                    stats[name] = stats.get(name, 0) + count
                    changed = True
            if not changed:
                break

        return redacted, stats

    def contains_pii(self, text: Optional[str]) -> bool:
        """True if any redaction pattern still matches the text"""
        if not text:
            return False
        return any(pattern.search(text) for _, pattern, _ in self._patterns)


# Default redactor instance
default_redactor = PIIRedactor()


def redact_pii(text: Optional[str]) -> str:
    """Convenience function to redact PII from text"""
    return default_redactor.redact(text)
