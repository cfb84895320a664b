"""Logging setup, combat event log and replay recording."""
