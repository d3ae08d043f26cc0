class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Invalid data."):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE IDENTIDADE
# ===============================================

class UsuarioJaExisteError(DadosInvalidosError):
    """E-mail ou username já cadastrado."""
    def __init__(self, message="User already exists"):
        super().__init__(message)

class CredenciaisInvalidasError(BaseErroCore):
    """Login falhou. Não diferencia e-mail inexistente de senha errada."""
    def __init__(self, message="Invalid credentials"):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="Not found"):
        self.message = message
        super().__init__(self.message)

class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando um produto específico não é encontrado."""
    def __init__(self, message="Product not found"):
        super().__init__(message)

class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    def __init__(self, message="Order not found"):
        super().__init__(message)

class UsuarioNaoEncontradoError(ItemNaoEncontradoError):
    def __init__(self, message="User not found"):
        super().__init__(message)

class EnderecoNaoEncontradoError(ItemNaoEncontradoError):
    def __init__(self, message="Address not found"):
        super().__init__(message)

# ===============================================
# ERROS DE FLUXO DE COMPRA E PAGAMENTO
# ===============================================

class CarrinhoVazioError(DadosInvalidosError):
    """Erro levantado ao tentar fechar um pedido sem itens."""
    def __init__(self, message="Order must contain at least one item"):
        super().__init__(message)

class StatusInvalidoError(DadosInvalidosError):
    """Erro levantado ao tentar definir um status fora do enum."""
    def __init__(self, message="Invalid status"):
        super().__init__(message)

class TransicaoStatusInvalidaError(StatusInvalidoError):
    """A máquina de estados recusou a transição (pulo ou retrocesso)."""
    def __init__(self, atual: str, novo: str, message=None):
        self.atual = atual
        self.novo = novo
        if message is None:
            message = f"Cannot change status from '{atual}' to '{novo}'"
        super().__init__(message)

class PagamentoFalhouError(BaseErroCore):
    """Erro levantado quando o Gateway de Pagamento falha ou recusa a requisição."""
    def __init__(self, message="Payment gateway request failed"):
        self.message = message
        super().__init__(self.message)

class AssinaturaInvalidaError(PagamentoFalhouError):
    """A assinatura HMAC enviada pelo cliente não confere."""
    def __init__(self, message="Invalid signature"):
        super().__init__(message)

class PagamentoJaUtilizadoError(DadosInvalidosError):
    """O pedido do gateway já quitou outro pedido da loja."""
    def __init__(self, message="This payment has already been used for another order"):
        super().__init__(message)

# ===============================================
# ERROS DE AVALIAÇÃO
# ===============================================

class AvaliacaoNaoPermitidaError(DadosInvalidosError):
    def __init__(self, message="Feedback can only be submitted for your delivered orders"):
        super().__init__(message)

class AvaliacaoDuplicadaError(DadosInvalidosError):
    def __init__(self, message="Feedback already submitted for this product"):
        super().__init__(message)
