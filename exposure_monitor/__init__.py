"""
Exposure Monitor - Device exposure-risk tracking

Periodically pulls published diagnosis-key batches, hands them to the
platform exposure-matching capability, and derives a local risk status
that drives exposure alerts and the key-submission workflow.

Guarantees:
- A time period is never processed twice
- A failed check leaves the persisted status untouched
- The most severe observed exposure is kept until it ages out
- Configuration always resolves (remote, cached, or bundled default)
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
