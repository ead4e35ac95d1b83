"""
Intent Configuration - Single Source of Truth for all keyword definitions.

Category detection, topic grouping and the thematic similarity bonus all read
their tables from here. Tables are read-only mappings; declaration order is the
tie-break order for detection and grouping.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

KeywordTable = Mapping[str, Tuple[str, ...]]

# =============================================================================
# CATEGORIES - pre-authored content, bypasses similarity search
# =============================================================================

GENERAL_CATEGORY = "general"

CATEGORY_KEYWORDS: KeywordTable = MappingProxyType({
    "horarios": ("horario", "calendario", "clases", "semestre", "fecha"),
    "servicio_social": ("servicio", "social", "pre-registro"),
    "eventos": ("evento", "conferencia", "taller", "avisos", "importantes"),
})

# =============================================================================
# TOPIC BUCKETS - used only to diversify similarity results
# =============================================================================

DEFAULT_TOPIC = "otros"

TOPIC_KEYWORDS: KeywordTable = MappingProxyType({
    "examenes": ("examen", "parcial", "final", "extraordinario"),
    "clases": ("clase", "curso", "laboratorio", "horario"),
    "tramites": ("baja", "inscripcion", "registro", "servicio"),
    "fechas": ("fecha", "cuando", "inicio", "termino"),
})

# =============================================================================
# THEMATIC SETS - keyword bonus in the similarity score
# =============================================================================

THEMATIC_KEYWORDS: KeywordTable = MappingProxyType({
    "tiempo": ("cuando", "fecha", "dia", "horario", "inicio", "termina", "empiezan"),
    "accion": ("hacer", "realizar", "comenzar", "terminar", "iniciar", "inscribir"),
    "documentos": ("calendario", "horario", "programa", "documento"),
    "academico": ("clase", "examen", "curso", "laboratorio", "parcial", "final"),
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def first_matching_label(text: str, table: KeywordTable, default: str) -> str:
    """Return the first label (in table order) with a keyword contained in text."""
    lowered = text.lower()
    for label, keywords in table.items():
        if any(kw in lowered for kw in keywords):
            return label
    return default


def freeze_table(table: Mapping[str, Tuple[str, ...]]) -> KeywordTable:
    """Copy a caller-provided table into an immutable, order-preserving mapping."""
    return MappingProxyType({str(k): tuple(v) for k, v in table.items()})
