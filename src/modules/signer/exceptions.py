class SignerJobError(Exception):
    """Base de los errores del job de firmas."""
    pass


class ValidationError(SignerJobError):
    """Datos del registro incompletos (firmante, archivo)."""
    pass


class UnsupportedMethodError(ValidationError):
    def __init__(self, method):
        self.method = method
        super().__init__(f"unsupported method: {method}")


class PreconditionError(SignerJobError):
    """Contrafirma sin una firma original válida."""
    pass


class GatewayError(SignerJobError):
    """Fallo de transporte o respuesta no-2xx de DropSigner."""

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        self.status_code = status_code
        self.detail = detail
        text = message
        if status_code is not None:
            text = f"{text} (status={status_code})"
        if detail:
            text = f"{text}: {detail}"
        super().__init__(text)


class NotFoundError(SignerJobError):
    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"signature request {record_id} not found")


class ConnectivityError(SignerJobError):
    """Base de datos inaccesible incluso después de reconectar."""
    pass


class RunInProgressError(SignerJobError):
    """Ya hay una ejecución del job en curso."""
    pass
