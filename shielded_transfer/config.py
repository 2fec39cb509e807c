"""
Shielded transfer configuration.
Defaults come from environment variables; `config` is the shared instance.
"""

import os

from .field import AmountPolicy

# Defaults
DEFAULT_PAIRING_CURVE = os.getenv('PAIRING_CURVE', 'BN254')
DEFAULT_COMMITMENT_SCHEME = os.getenv('COMMITMENT_SCHEME', 'pedersen')

# Amount policy
DEFAULT_AMOUNT_WIDTH = int(os.getenv('AMOUNT_WIDTH', 64))
# Zero-value notes (e.g. draining a balance) are accepted unless disabled
ALLOW_ZERO_AMOUNTS = os.getenv('ALLOW_ZERO_AMOUNTS', 'true').lower() == 'true'

DEFAULT_BATCH_WORKERS = int(os.getenv('BATCH_WORKERS', 4))
DEFAULT_LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')


class Config:
    """Configuration for the verifier and CLI."""

    def __init__(self):
        self.pairing_curve = DEFAULT_PAIRING_CURVE
        self.commitment_scheme = DEFAULT_COMMITMENT_SCHEME
        self.amount_width = DEFAULT_AMOUNT_WIDTH
        self.allow_zero_amounts = ALLOW_ZERO_AMOUNTS
        self.batch_workers = DEFAULT_BATCH_WORKERS
        self.log_level = DEFAULT_LOG_LEVEL

    def amount_policy(self) -> AmountPolicy:
        return AmountPolicy(width=self.amount_width, allow_zero=self.allow_zero_amounts)


config = Config()
