"""Domain port interfaces for hexagonal architecture.

Ports define abstract interfaces that the domain layer uses to interact
with external services. Implementations (adapters) live in infrastructure.
"""

from custodia.foundation.domain.ports.attachment_usage import AttachmentUsagePort

__all__ = ["AttachmentUsagePort"]
