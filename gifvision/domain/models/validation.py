# -*- coding: utf-8 -*-
"""
Veredictos de validação dos três estágios da pipeline

Stream: Valid | Error(reasons)
Blend de camada e blend master: Ready | Blocked(reasons)

Só o ramo de falha carrega motivos, e nunca uma lista vazia.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Tuple, Union


class _Failure:
    """Base dos ramos de falha: garante motivos não vazios e em ordem"""

    reasons: Tuple[str, ...]

    def __post_init__(self):
        reasons = tuple(self.reasons)
        if not reasons:
            raise AssertionError(
                f"{type(self).__name__} precisa de pelo menos um motivo"
            )
        object.__setattr__(self, "reasons", reasons)


@dataclass(frozen=True)
class Valid:
    """Stream pronto para renderizar"""


@dataclass(frozen=True)
class Error(_Failure):
    """Stream não pode renderizar até os motivos serem resolvidos"""

    reasons: Tuple[str, ...]


@dataclass(frozen=True)
class Ready:
    """Blend pronto para ser despachado"""


@dataclass(frozen=True)
class Blocked(_Failure):
    """Blend bloqueado até os motivos serem resolvidos"""

    reasons: Tuple[str, ...]


StreamValidation = Union[Valid, Error]
LayerBlendValidation = Union[Ready, Blocked]
MasterBlendValidation = Union[Ready, Blocked]


def stream_verdict(reasons: Iterable[str]) -> StreamValidation:
    reasons = tuple(reasons)
    return Error(reasons) if reasons else Valid()


def blend_verdict(reasons: Iterable[str]) -> Union[Ready, Blocked]:
    reasons = tuple(reasons)
    return Blocked(reasons) if reasons else Ready()


def is_ok(verdict) -> bool:
    """True para Valid/Ready"""
    return isinstance(verdict, (Valid, Ready))


def reasons_of(verdict) -> Tuple[str, ...]:
    """Motivos do veredicto (tupla vazia nos ramos de sucesso)"""
    return verdict.reasons if isinstance(verdict, _Failure) else ()
