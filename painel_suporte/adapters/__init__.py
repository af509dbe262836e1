"""Adapters (Driving e Driven) do painel de suporte."""
