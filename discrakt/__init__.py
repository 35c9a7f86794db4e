"""Trakt watch state mirrored onto Discord rich presence."""
