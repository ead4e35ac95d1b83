import pytest

from faq_assistant.engines.similarity import (
    calculate_similarity,
    keyword_score,
    length_penalty_score,
    normalize_text,
    question_similarity,
    similarity_breakdown,
    substring_score,
    word_overlap_score,
)
from faq_assistant.schemas import Question


class TestNormalizeText:
    def test_strips_accents_punctuation_and_case(self):
        assert normalize_text("¿Cuándo Inician las CLASES?") == "cuando inician las clases"

    def test_trims_whitespace(self):
        assert normalize_text("   ¡Hola, mundo!  ") == "hola mundo"

    def test_enye_loses_its_tilde(self):
        assert normalize_text("Año") == "ano"

    def test_keeps_other_punctuation(self):
        assert normalize_text("pre-registro: 2024") == "pre-registro: 2024"

    @pytest.mark.parametrize("text", [
        "¿Cuándo es el examen final?",
        "  INSCRIPCIÓN ¡ya!  ",
        "",
        "ñandú . , ¿ ? ¡ !",
        "Ünïcödé     spaces",
        "\ufeffexamen\ufeff final",
    ])
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once

    def test_strips_byte_order_mark(self):
        assert normalize_text("\ufeffexamen\ufeff") == "examen"
        assert normalize_text("examen\ufefffinal").split() == ["examen", "final"]

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            normalize_text(None)


class TestScoreTerms:
    def test_word_overlap_divides_by_longer_list(self):
        assert word_overlap_score("a b c", "a b") == pytest.approx(2 / 3)

    def test_word_overlap_counts_repeats_of_first_list(self):
        assert word_overlap_score("a a", "a b") == pytest.approx(1.0)
        assert word_overlap_score("a b", "a a") == pytest.approx(0.5)

    def test_word_overlap_empty_is_zero(self):
        assert word_overlap_score("", "examen") == 0.0
        assert word_overlap_score("", "") == 0.0

    def test_substring_either_direction(self):
        assert substring_score("examen final", "cuando es el examen final") == 0.5
        assert substring_score("cuando es el examen final", "examen final") == 0.5
        assert substring_score("igual", "igual") == 0.5
        assert substring_score("baja", "alta") == 0.0

    def test_keyword_sets_add_independently(self):
        # tiempo (cuando/fecha) and academico (examen) match on both sides
        assert keyword_score("cuando es el examen", "fecha del examen final") == pytest.approx(0.6)

    def test_keyword_all_four_sets(self):
        text = "cuando hacer horario clase"
        assert keyword_score(text, text) == pytest.approx(1.2)

    def test_keyword_needs_both_sides(self):
        assert keyword_score("cuando", "nada que ver") == 0.0

    def test_keyword_custom_table(self):
        table = {"becas": ("beca",)}
        assert keyword_score("beca alimenticia", "una beca", table) == pytest.approx(0.3)

    def test_length_penalty(self):
        assert length_penalty_score("", "") == 1.0
        assert length_penalty_score("abcd", "ab") == pytest.approx(0.75)
        assert length_penalty_score("", "abc") == pytest.approx(0.5)


class TestCalculateSimilarity:
    def test_identical_text_scores_at_least_point_six(self):
        assert calculate_similarity("hola mundo", "hola mundo") == pytest.approx(0.6)
        assert calculate_similarity("examen parcial", "examen parcial") >= 0.6

    def test_weighted_blend(self):
        parts = similarity_breakdown("cuando sera el examen", "¿Cuándo es el examen final?")
        assert parts.word_overlap == pytest.approx(0.6)
        assert parts.substring == 0.0
        assert parts.keyword == pytest.approx(0.6)
        assert parts.length_penalty == pytest.approx(0.92)
        assert parts.total == pytest.approx(0.512)

    def test_empty_strings_do_not_divide_by_zero(self):
        assert calculate_similarity("", "") == pytest.approx(0.2)
        assert calculate_similarity("", "¿?") == pytest.approx(0.2)

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            calculate_similarity("examen", 42)


class TestQuestionSimilarity:
    def test_takes_weighted_question_match(self, exam_question):
        # 0.512 * 1.2 beats the answer match
        assert question_similarity("cuando sera el examen", exam_question) == pytest.approx(0.6144)

    def test_not_clamped_above_one(self):
        text = "cuando hacer horario clase"
        q = Question(question=text, answer="sin relacion")
        # 0.96 raw, times the question weight
        assert question_similarity(text, q) == pytest.approx(1.152)

    def test_answer_match_can_win(self):
        q = Question(question="Pregunta sin relacion", answer="el laboratorio abre a las ocho")
        score = question_similarity("el laboratorio abre a las ocho", q)
        expected = calculate_similarity(
            "el laboratorio abre a las ocho", "el laboratorio abre a las ocho"
        ) * 0.8
        assert score == pytest.approx(expected)
