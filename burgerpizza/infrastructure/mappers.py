"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (burgerpizza.core.entities)
"""
from typing import Any, Optional, Type
from django.db import models
from django.apps import apps

from burgerpizza.core.entities import (
    Avaliacao as AvaliacaoEntity,
    Endereco as EnderecoEntity,
    ItemCarrinho as ItemCarrinhoEntity,
    ItemListaDesejos as ItemListaDesejosEntity,
    ItemPedido as ItemPedidoEntity,
    Pedido as PedidoEntity,
    Produto as ProdutoEntity,
    TransacaoPagamento as TransacaoPagamentoEntity,
    Usuario as UsuarioEntity,
)


# ====================================================================
# Uso de apps.get_model para evitar dependências circulares
# ====================================================================

def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


class BaseMapper:

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        raise NotImplementedError


# ====================================================================
# MAPPERS DO CATÁLOGO
# ====================================================================

class ProdutoMapper(BaseMapper):
    """Mapeador para Produto."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('catalog', 'Produto')

    @staticmethod
    def to_entity(model: Any) -> Optional[ProdutoEntity]:
        if not model: return None
        return ProdutoEntity(
            id=model.id,
            nome=model.nome,
            descricao=model.descricao,
            categoria=model.categoria,
            preco=model.preco,
            imagem=model.imagem.url if model.imagem else None,
            mais_vendido=model.mais_vendido,
            data_criacao=model.data_criacao,
        )

    @classmethod
    def to_model(cls, entity: ProdutoEntity, model: Optional[Any] = None) -> Any:
        """Copia os campos editáveis; a imagem é tratada pelo repositório."""
        if not model:
            model = cls.model_class()()
        model.nome = entity.nome
        model.descricao = entity.descricao
        model.categoria = entity.categoria
        model.preco = entity.preco
        model.mais_vendido = entity.mais_vendido
        return model


# ====================================================================
# MAPPERS DE USUÁRIO E ENDEREÇO
# ====================================================================

class UsuarioMapper(BaseMapper):

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('infrastructure', 'Usuario')

    @staticmethod
    def to_entity(model: Any) -> Optional[UsuarioEntity]:
        if not model: return None
        return UsuarioEntity(
            id=model.id,
            username=model.username,
            email=model.email,
            contato=model.contato,
            is_admin=model.is_admin,
        )


class EnderecoMapper(BaseMapper):

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('infrastructure', 'Endereco')

    @staticmethod
    def to_entity(model: Any) -> Optional[EnderecoEntity]:
        if not model: return None
        return EnderecoEntity(
            id=model.id,
            usuario_id=model.usuario_id,
            rua=model.rua,
            cidade=model.cidade,
            estado=model.estado,
            cep=model.cep,
        )

    @staticmethod
    def from_snapshot(dados: Optional[dict]) -> Optional[EnderecoEntity]:
        """Reconstrói o endereço a partir do JSON gravado no pedido."""
        if not dados: return None
        return EnderecoEntity(
            rua=dados.get('street', ''),
            cidade=dados.get('city', ''),
            estado=dados.get('state', ''),
            cep=dados.get('zip', ''),
        )

    @classmethod
    def to_model(cls, entity: EnderecoEntity, model: Optional[Any] = None) -> Any:
        if not model:
            model = cls.model_class()(usuario_id=entity.usuario_id)
        model.rua = entity.rua
        model.cidade = entity.cidade
        model.estado = entity.estado
        model.cep = entity.cep
        return model


# ====================================================================
# MAPPERS DO CARRINHO E LISTA DE DESEJOS
# ====================================================================

class ItemCarrinhoMapper(BaseMapper):

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('carrinho', 'ItemCarrinho')

    @staticmethod
    def to_entity(model: Any) -> Optional[ItemCarrinhoEntity]:
        if not model: return None
        return ItemCarrinhoEntity(
            produto_id=model.produto_id,
            quantidade=model.quantidade,
            produto=ProdutoMapper.to_entity(model.produto),
        )


class ItemListaDesejosMapper(BaseMapper):

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('carrinho', 'ItemListaDesejos')

    @staticmethod
    def to_entity(model: Any) -> Optional[ItemListaDesejosEntity]:
        if not model: return None
        return ItemListaDesejosEntity(
            produto_id=model.produto_id,
            produto=ProdutoMapper.to_entity(model.produto),
            data_adicao=model.data_adicao,
        )


# ====================================================================
# MAPPERS DE PEDIDO E AVALIAÇÃO
# ====================================================================

class ItemPedidoMapper(BaseMapper):
    """Mapeador para ItemPedido."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('pedidos', 'ItemPedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[ItemPedidoEntity]:
        if not model: return None
        return ItemPedidoEntity(
            produto_id=model.produto_id,
            nome_produto=model.nome_produto,
            preco_unitario=model.preco_unitario,
            quantidade=model.quantidade,
            produto=ProdutoMapper.to_entity(model.produto) if model.produto_id else None,
        )

    @classmethod
    def to_model(cls, entity: ItemPedidoEntity, pedido_id: int) -> Any:
        # Snapshot dos dados: nome e preço não dependem do produto continuar existindo
        return cls.model_class()(
            pedido_id=pedido_id,
            produto_id=entity.produto_id,
            nome_produto=entity.nome_produto,
            preco_unitario=entity.preco_unitario,
            quantidade=entity.quantidade,
        )


class PedidoMapper(BaseMapper):
    """Mapeador para Pedido."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('pedidos', 'Pedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        """Converte Pedido Model para Pedido Entity, incluindo itens e cliente."""
        if not model: return None
        return PedidoEntity(
            id=model.id,
            usuario_id=model.usuario_id,
            usuario=UsuarioMapper.to_entity(model.usuario),
            itens=[ItemPedidoMapper.to_entity(item) for item in model.itens.all()],
            total=model.total,
            metodo_pagamento=model.metodo_pagamento,
            status=model.status,
            status_pagamento=model.status_pagamento,
            endereco_entrega=EnderecoMapper.from_snapshot(model.endereco_entrega_json),
            gateway_pedido_id=model.gateway_pedido_id,
            gateway_pagamento_id=model.gateway_pagamento_id,
            data_criacao=model.data_criacao,
        )

    @classmethod
    def to_model(cls, entity: PedidoEntity) -> Any:
        return cls.model_class()(
            usuario_id=entity.usuario_id,
            total=entity.total,
            metodo_pagamento=entity.metodo_pagamento,
            status=entity.status,
            status_pagamento=entity.status_pagamento,
            gateway_pedido_id=entity.gateway_pedido_id,
            gateway_pagamento_id=entity.gateway_pagamento_id,
            endereco_entrega_json=entity.endereco_entrega.to_dict() if entity.endereco_entrega else None,
        )


class AvaliacaoMapper(BaseMapper):

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('avaliacoes', 'Avaliacao')

    @staticmethod
    def to_entity(model: Any, completo: bool = False) -> Optional[AvaliacaoEntity]:
        """Com `completo`, expande usuário, pedido e produto (visão do painel)."""
        if not model: return None
        return AvaliacaoEntity(
            id=model.id,
            usuario_id=model.usuario_id,
            pedido_id=model.pedido_id,
            produto_id=model.produto_id,
            nota=model.nota,
            comentario=model.comentario,
            data_criacao=model.data_criacao,
            usuario=UsuarioMapper.to_entity(model.usuario) if completo else None,
            pedido=PedidoMapper.to_entity(model.pedido) if completo else None,
            produto=ProdutoMapper.to_entity(model.produto) if completo else None,
        )


class TransacaoPagamentoMapper(BaseMapper):

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('pedidos', 'TransacaoGateway')

    @staticmethod
    def to_entity(model: Any) -> Optional[TransacaoPagamentoEntity]:
        if not model: return None
        return TransacaoPagamentoEntity(
            referencia_externa=model.gateway_pedido_id,
            valor=model.valor,
            moeda=model.moeda,
            recibo=model.recibo,
            status=model.status,
            usuario_id=model.usuario_id,
        )

    @classmethod
    def to_model(cls, entity: TransacaoPagamentoEntity) -> Any:
        return cls.model_class()(
            gateway_pedido_id=entity.referencia_externa,
            valor=entity.valor,
            moeda=entity.moeda,
            recibo=entity.recibo,
            status=entity.status,
            usuario_id=entity.usuario_id,
        )
