"""Static lookup tables used by the compatibility scorer."""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

DEFAULT_LEVEL_RANK = 2

LEVEL_RANKS: Dict[str, int] = {
    "Júnior": 1,
    "Junior": 1,
    "Pleno": 2,
    "Mid": 2,
    "Sênior": 3,
    "Senior": 3,
    "Especialista": 3,
    "Specialist": 3,
    "Coordenador": 4,
    "Coordinator": 4,
    "Gerente": 5,
    "Gerência": 5,
    "Manager": 5,
    "Diretor": 6,
    "Director": 6,
    "VP": 7,
    "C-Level": 8,
}

# pillar -> pillars considered adjacent; intentionally not symmetric
RELATED_AREAS: Mapping[str, Tuple[str, ...]] = {
    "Tecnologia": ("Dados", "Produto"),
    "Gestão": ("Financeiro", "Recursos Humanos"),
    "Financeiro": ("Gestão", "Dados"),
    "Dados": ("Tecnologia", "Financeiro"),
    "Produto": ("Tecnologia", "Dados"),
    "Recursos Humanos": ("Gestão",),
}

HIGH_DEMAND_ROLES: Tuple[str, ...] = (
    "Data Scientist",
    "Product Manager",
    "DevOps Engineer",
    "UX Designer",
    "ML Engineer",
    "Cloud Architect",
    "Scrum Master",
)

# title keyword of the source -> title keywords of typical next roles
COMMON_TRANSITIONS: Mapping[str, Tuple[str, ...]] = {
    "Desenvolvedor": ("Tech Lead", "Arquiteto", "DevOps Engineer", "Product Manager"),
    "Analista": ("Product Manager", "Data Scientist", "Consultor", "Coordenador"),
    "Designer": ("Product Manager", "UX Manager", "Creative Director"),
    "QA": ("DevOps Engineer", "Product Manager", "Scrum Master"),
    "Tech Lead": ("Gerente", "Arquiteto", "Product Manager"),
    "Coordenador": ("Gerente", "Especialista", "Consultor"),
}
