"""Fixed devotional texts for "A Jornada das 3 Âncoras".

Single source of truth for the PDF and for any on-page rendering of the
chapters (see ``chapters_as_dicts``).
"""

from __future__ import annotations

from dataclasses import asdict

from jornada_pdf.content.models import Chapter, DevotionalContent

DOCUMENT_TITLE = "A Jornada das 3 Âncoras"
DOCUMENT_SUBTITLE = "Prudência e Justiça | Fortaleza | Temperança"
FOOTER_LABEL = "Jornada das 3 Âncoras"
FILE_NAME = "Jornada_3_Ancoras.pdf"

INTRODUCTION = (
    "Esta jornada não é sobre acumular regras ou criar uma lista de exigências "
    "moralistas que vão deixar você exausto. É sobre construir a base do seu "
    "edifício interior. As virtudes cardeais são ferramentas de graça. Elas não "
    "servem para acusar os seus erros, mas para dar estabilidade à sua alma, "
    "ordenar a sua rotina sem peso e ensinar você a recomeçar em paz sempre que "
    "tropeçar."
)

OPENING_VERSE = (
    '"Vinde a mim, todos os que estais cansados e oprimidos, '
    'e eu vos aliviarei." (Mateus 11, 28)'
)

ACTION_PREFIX = "Ação Prática:"

CHAPTERS: tuple[Chapter, ...] = (
    Chapter(
        title="Âncora 1: Prudência e Justiça (A Ordem da Vida)",
        quote=(
            '"A Sabedoria ensina a temperança e a prudência, a justiça e a '
            'fortaleza; na vida, nada há mais útil." (Sabedoria 8, 7)'
        ),
        summary=(
            "A verdadeira ordem na vida espiritual nasce do amor, não da "
            "obrigação. Priorizar a oração não é uma regra a mais para te "
            "cansar, mas um ato de prudência para dar descanso ao seu coração."
        ),
        reflection=(
            "Muitas vezes, tentamos rezar usando apenas as 'sobras' do nosso "
            "tempo. Quando chega a noite, e estamos exaustos, dormimos no meio "
            "da leitura e acordamos com aquele peso terrível de dever não "
            "cumprido. Livre-se dessa culpa. A Prudência é a inteligência "
            "sabendo a hora de agir, e a Justiça é dar a Deus o espaço que Lhe "
            "é devido, sem pressa."
        ),
        action=(
            "Ação Prática: Pegue a agenda do seu celular e bloqueie com carinho "
            "15 minutos do seu dia para Deus. Trate esse encontro como o seu "
            "compromisso inadiável de descanso."
        ),
    ),
    Chapter(
        title="Âncora 2: Fortaleza (A Ciência de Levantar)",
        quote='"Porque sete vezes cai o justo, e se levanta." (Provérbios 24, 16)',
        summary=(
            "A santidade não é ser impecável e nunca cair. A grande mentira do "
            "perfeccionismo é fazer você desistir no primeiro tropeço. A "
            "fortaleza é ter a coragem suave de se levantar rápido."
        ),
        reflection=(
            "A Fortaleza não é a ausência de erros, é a ciência de levantar "
            "mais rápido. Deus não é um contador anotando seus débitos. Se você "
            "caiu, sorria para a sua própria humanidade, perdoe a si mesmo e "
            "lembre-se: o seu momento ideal para começar é agora. Retome o "
            "caminho sem tentar se punir amanhã."
        ),
        action=(
            "Ação Prática: Se você escorregar em algum propósito hoje, não se "
            "culpe e nem tente compensar com sacrifícios pesados. Apenas "
            "recomece imediatamente com o coração leve."
        ),
    ),
    Chapter(
        title="Âncora 3: Temperança (O Domínio do Conforto)",
        quote=(
            '"Todo atleta em tudo se domina; aqueles, para alcançar uma coroa '
            'corruptível; nós, porém, a incorruptível." (1 Coríntios 9, 25)'
        ),
        summary=(
            "Vivemos na era do excesso de informações, telas e confortos. A "
            "temperança é o freio carinhoso da alma. Pequenas pausas e "
            "pequenos 'nãos' fortalecem a liberdade do nosso espírito."
        ),
        reflection=(
            "A Temperança não é uma privação triste, é o freio de mão da nossa "
            "alma. Quem não consegue dizer um simples 'não' para uma "
            "notificação de celular, dificilmente terá músculos espirituais "
            "para resistir a tentações maiores. Ensine ao seu corpo, em "
            "pequenas coisas, que quem dá as ordens é o seu espírito amparado "
            "pela graça."
        ),
        action=(
            "Ação Prática: Atrase um prazer legítimo com leveza hoje. Quando "
            "for beber água, coloque o copo na mesa e espere um minuto antes "
            "de beber, usando esse tempo apenas para respirar e agradecer."
        ),
    ),
)

DEFAULT_CONTENT = DevotionalContent(
    title=DOCUMENT_TITLE,
    subtitle=DOCUMENT_SUBTITLE,
    introduction=INTRODUCTION,
    verse=OPENING_VERSE,
    chapters=CHAPTERS,
    footer_label=FOOTER_LABEL,
    file_name=FILE_NAME,
)


def chapters_as_dicts(chapters: tuple[Chapter, ...] = CHAPTERS) -> list[dict]:
    """Return chapter data as plain dicts (for the JS frontend)."""
    return [asdict(ch) for ch in chapters]
