"""Custom exceptions for the bakery backend."""

class BakeryError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv

class BusinessLogicError(BakeryError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)

class NotFoundError(BakeryError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)

class ProductNotFoundError(NotFoundError):
    """Raised when a product id does not exist in the current catalog."""
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__('Produto não encontrado', payload={'product_id': product_id})

class InsufficientStockError(BusinessLogicError):
    """Raised when a sale asks for more units than are on hand."""
    def __init__(self, product_id, product_name, requested, available):
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        message = f"Estoque insuficiente de {product_name}: solicitado {requested}, disponível {available}"
        super().__init__(message, status_code=409, payload={
            'product_id': product_id,
            'product_name': product_name,
            'requested': requested,
            'available': available,
        })

class InvalidCredentialsError(BakeryError):
    """Raised when no active user matches the given email and password."""
    def __init__(self, message="Credenciais inválidas"):
        super().__init__(message, 401)

class UnauthorizedError(BakeryError):
    """Raised when an operation requires an authenticated session."""
    def __init__(self, message="É preciso entrar no painel para continuar"):
        super().__init__(message, 401)

class StorageError(BakeryError):
    """Raised when the key-value backend rejects a write."""
    def __init__(self, message="Falha ao gravar dados"):
        super().__init__(message, 503)
