"""Exception definitions for Dockyard"""


class DockyardException(Exception):
    """Base exception for all Dockyard errors.

    All custom exceptions in the toolkit inherit from this class.
    Use this as a catch-all for Dockyard-specific errors when you don't need
    to handle specific exception types.
    """

    pass


class ConfigException(DockyardException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class SchemaException(DockyardException):
    """Raised when a service schema lookup or schema path is invalid.

    Use this exception when:
    - An unknown service kind is requested from the catalog
    - A dot-path does not name a field of the schema
    """

    pass


class ClientError(DockyardException):
    """Raised when the REST client itself is misused.

    Network and HTTP failures are returned as result values by the client,
    never raised. This exception covers programming errors only, such as an
    unsupported HTTP method or an empty endpoint path.
    """

    pass


class AuthException(DockyardException):
    """Raised when signing in fails or the gateway returns no access token."""

    pass
