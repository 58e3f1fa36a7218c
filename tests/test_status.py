#!/usr/bin/env python3
"""Tests for OrderStatus and OrderType enums."""

from fleet import OrderStatus, OrderType


class TestOrderStatus:
    """Tests for OrderStatus values and ordering."""

    def test_values_match_labels(self):
        assert OrderStatus("Abierta") is OrderStatus.ABIERTA
        assert OrderStatus("En Progreso") is OrderStatus.EN_PROGRESO
        assert OrderStatus("Cerrada") is OrderStatus.CERRADA

    def test_rank_follows_lifecycle(self):
        """Abierta < En Progreso < Cerrada."""
        assert OrderStatus.ABIERTA.rank < OrderStatus.EN_PROGRESO.rank
        assert OrderStatus.EN_PROGRESO.rank < OrderStatus.CERRADA.rank


class TestOrderType:
    """Tests for OrderType enum."""

    def test_values_match_labels(self):
        assert OrderType("Preventivo") is OrderType.PREVENTIVO
        assert OrderType("Correctivo") is OrderType.CORRECTIVO
