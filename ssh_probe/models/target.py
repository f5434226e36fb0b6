"""Connection target data model."""

from dataclasses import dataclass, field

from ssh_probe.utils.validation import validate_host, validate_port, validate_principal


@dataclass(frozen=True)
class ConnectionTarget:
    """Where and as whom to connect.

    Built fresh for each test action and discarded afterwards. The secret
    is kept out of repr() so the target can be logged safely.
    """

    host: str
    principal: str
    secret: str = field(repr=False)
    port: int = 22

    def __post_init__(self) -> None:
        validate_host(self.host)
        validate_principal(self.principal)
        validate_port(self.port)

    @property
    def address(self) -> str:
        """Secret-free principal@host:port rendering."""
        return f"{self.principal}@{self.host}:{self.port}"
