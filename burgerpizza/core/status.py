# burgerpizza/core/status.py
"""
Máquinas de estado do Pedido (preparo/entrega) e do Pagamento.

As tabelas de transição são a única fonte de verdade sobre quais mudanças
de status são aceitas. Os casos de uso chamam `validar_transicao` antes de
persistir qualquer escrita de status.
"""
from typing import Dict, FrozenSet, Tuple

from burgerpizza.core.exceptions import StatusInvalidoError, TransicaoStatusInvalidaError


class StatusPedido:
    PLACED = 'placed'
    PREPARING = 'preparing'
    PREPARED = 'prepared'
    OUT_FOR_DELIVERY = 'out_for_delivery'
    DELIVERED = 'delivered'

    # Ordem de exibição e de avanço
    TODOS: Tuple[str, ...] = (PLACED, PREPARING, PREPARED, OUT_FOR_DELIVERY, DELIVERED)

    TRANSICOES: Dict[str, FrozenSet[str]] = {
        PLACED: frozenset({PREPARING}),
        PREPARING: frozenset({PREPARED}),
        PREPARED: frozenset({OUT_FOR_DELIVERY}),
        OUT_FOR_DELIVERY: frozenset({DELIVERED}),
        DELIVERED: frozenset(),
    }

    INICIAL = PLACED
    TERMINAL = DELIVERED


class StatusPagamento:
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'

    TODOS: Tuple[str, ...] = (PENDING, COMPLETED, FAILED)

    TRANSICOES: Dict[str, FrozenSet[str]] = {
        PENDING: frozenset({COMPLETED, FAILED}),
        FAILED: frozenset({COMPLETED}),
        COMPLETED: frozenset(),
    }

    INICIAL = PENDING


def validar_status(maquina, status: str) -> None:
    if status not in maquina.TODOS:
        raise StatusInvalidoError(
            f"Invalid status '{status}'. Expected one of: {', '.join(maquina.TODOS)}"
        )


def pode_transitar(maquina, atual: str, novo: str) -> bool:
    return novo in maquina.TRANSICOES.get(atual, frozenset())


def validar_transicao(maquina, atual: str, novo: str) -> bool:
    """
    Valida a mudança `atual -> novo` contra a tabela da máquina.

    Retorna False quando `novo == atual` (nada a persistir) e True quando a
    transição é válida. Levanta StatusInvalidoError para valores fora do enum
    e TransicaoStatusInvalidaError para pulos ou retrocessos.
    """
    validar_status(maquina, novo)
    if novo == atual:
        return False
    if not pode_transitar(maquina, atual, novo):
        raise TransicaoStatusInvalidaError(atual, novo)
    return True
