"""
API types - Pydantic request/response models.

Thin adapters around helpers/dto; services never import Pydantic.
"""
