import hashlib
import hmac
import logging

import requests
from django.conf import settings

from burgerpizza.core.entities import TransacaoPagamento
from burgerpizza.core.exceptions import PagamentoFalhouError
from burgerpizza.core.ports import IGatewayPagamento

logger = logging.getLogger(__name__)


# ====================================================================
# GATEWAYS: Implementações concretas que se comunicam com APIs externas.
# ====================================================================

class RazorpayGateway(IGatewayPagamento):
    """
    Gateway para a API de Orders do Razorpay.

    A criação do pedido é uma chamada REST autenticada com (key_id, key_secret).
    A verificação da assinatura é local: HMAC-SHA256 de "order_id|payment_id"
    com o key_secret, comparado em tempo constante.
    """

    # Mapeamento do status do Razorpay para o status de TransacaoPagamento
    _STATUS_MAP = {
        "created": "created",
        "attempted": "attempted",
        "paid": "paid",
    }

    def __init__(self, key_id=None, key_secret=None, api_base_url=None, timeout=15):
        self.key_id = key_id if key_id is not None else settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret if key_secret is not None else settings.RAZORPAY_KEY_SECRET
        self.api_base_url = (api_base_url or settings.RAZORPAY_API_URL).rstrip('/')
        self.timeout = timeout

        if not self.key_id or not self.key_secret:
            logger.warning("RAZORPAY_KEY_ID/RAZORPAY_KEY_SECRET não configurados. Pagamentos online falharão.")

    def criar_pedido(self, valor: int, moeda: str, recibo: str) -> TransacaoPagamento:
        payload = {
            "amount": valor,
            "currency": moeda,
            "receipt": recibo,
        }

        try:
            response = requests.post(
                f"{self.api_base_url}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error("Erro ao criar pedido no Razorpay (recibo %s): %s", recibo, e)
            raise PagamentoFalhouError("Failed to create payment order")
        except ValueError:
            logger.error("Resposta inválida do Razorpay ao criar pedido (recibo %s)", recibo)
            raise PagamentoFalhouError("Failed to create payment order")

        logger.info("Pedido %s criado no Razorpay (recibo %s)", data.get("id"), recibo)
        return TransacaoPagamento(
            referencia_externa=data["id"],
            valor=data.get("amount", valor),
            moeda=data.get("currency", moeda),
            recibo=data.get("receipt", recibo),
            status=self._STATUS_MAP.get(data.get("status"), "created"),
        )

    def gerar_assinatura(self, gateway_pedido_id: str, gateway_pagamento_id: str) -> str:
        mensagem = f"{gateway_pedido_id}|{gateway_pagamento_id}"
        return hmac.new(
            (self.key_secret or '').encode('utf-8'),
            mensagem.encode('utf-8'),
            hashlib.sha256,
        ).hexdigest()

    def verificar_assinatura(self, gateway_pedido_id: str, gateway_pagamento_id: str, assinatura: str) -> bool:
        if not self.key_secret or not assinatura:
            return False
        esperada = self.gerar_assinatura(gateway_pedido_id, gateway_pagamento_id)
        return hmac.compare_digest(esperada, assinatura)
