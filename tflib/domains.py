from __future__ import annotations

from enum import Enum

from tflib.exceptions import ConstructionError


class Domain(Enum):
    "Transform domain of a transfer function: Laplace (s) or Z-transform (z)."
    S = 's'
    Z = 'z'

    @property
    def variable(self) -> str:
        "Name of the transform variable, used when rendering."
        return self.value

    def other(self) -> Domain:
        return Domain.Z if self is Domain.S else Domain.S

    def __str__(self) -> str:
        return self.name


def as_domain(domain: Domain | str) -> Domain:
    "Converts a Domain or its variable name ('s', 'z', 'S', 'Z') to a Domain."
    if isinstance(domain, Domain):
        return domain
    if isinstance(domain, str) and domain.lower() in ('s', 'z'):
        return Domain(domain.lower())
    raise ConstructionError(f'Unknown transform domain {domain!r}, expected S or Z.')
