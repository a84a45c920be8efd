# Marcadores heurísticos para textos acadêmicos em português.
# Cada categoria: termos que abrem a janela, termos que a fecham e a sentinela.

from types import MappingProxyType
from typing import NamedTuple, Tuple


class Category(NamedTuple):
    start: Tuple[str, ...]
    end: Tuple[str, ...]
    sentinel: str


# 1) Metodologia
METHOD_MARKERS = (
    "método", "metodologia", "abordagem", "estudo", "pesquisa",
    "qualitativo", "quantitativo", "análise", "coleta de dados",
    "revisão", "prática", "artigos", "temas",
)
METHOD_END = ("resultados", "conclusão", "discussão", "considerações finais", "abstract", "resumo")

# 2) Local / contexto
LOCATION_MARKERS = (
    "local", "região", "cidade", "estado", "país", "instituição",
    "universidade", "hospital", "clínica", "escola", "território",
    "sociocultural", "contexto",
)
LOCATION_END = ("método", "metodologia", "participantes", "resultados", "abstract", "resumo")

# 3) Participantes
PARTICIPANT_MARKERS = (
    "participantes", "sujeitos", "amostra", "população", "grupo",
    "pacientes", "estudantes", "profissionais", "voluntários",
    "autores", "pesquisadores",
)
PARTICIPANT_END = ("resultados", "análise", "procedimentos", "abstract", "resumo")

CATEGORIES = MappingProxyType({
    "method": Category(METHOD_MARKERS, METHOD_END, "Metodologia não identificada"),
    "location": Category(LOCATION_MARKERS, LOCATION_END, "Local não identificado"),
    "participants": Category(
        PARTICIPANT_MARKERS, PARTICIPANT_END, "Informações sobre participantes não identificadas"
    ),
})

# Ranking de palavras-chave
KEYWORD_LIMIT = 5
KEYWORD_MIN_LENGTH = 4
KEYWORD_PUNCTUATION = ".,/#!$%^&*;:{}=-_`~()"
