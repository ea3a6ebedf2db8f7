import pytest

from contract_explainer.core.exceptions import ReconciliationError
from contract_explainer.services.response_reconciler import (
    find_first_object_span,
    parse_classification,
)

PAYLOAD = (
    '{"seguras": [{"titulo": "Prazo", "resumo": "Vigência de 12 meses."}], '
    '"riscos": [{"titulo": "Multa", "resumo": "Multa de {3} aluguéis na rescisão."}]}'
)


class TestFindFirstObjectSpan:
    def test_no_brace(self) -> None:
        assert find_first_object_span("sem json aqui") is None

    def test_unbalanced(self) -> None:
        assert find_first_object_span('texto {"a": 1') is None

    def test_skips_stray_unclosed_brace(self) -> None:
        text = 'Formato { conforme pedido:\n{"a": {"b": 1}} fim'
        start, end = find_first_object_span(text)
        assert text[start:end] == '{"a": {"b": 1}}'

    def test_nested_objects(self) -> None:
        text = 'antes {"a": {"b": {"c": 1}}} depois {"d": 2}'
        start, end = find_first_object_span(text)
        assert text[start:end] == '{"a": {"b": {"c": 1}}}'

    def test_braces_inside_strings_are_ignored(self) -> None:
        text = 'x {"a": "}{", "b": "aspas \\" e }"} y'
        start, end = find_first_object_span(text)
        assert text[start:end] == '{"a": "}{", "b": "aspas \\" e }"}'


class TestParseClassification:
    @pytest.mark.parametrize(
        "raw_text",
        [
            PAYLOAD,
            f"```json\n{PAYLOAD}\n```",
            f"Claro! Aqui está a classificação:\n\n```json\n{PAYLOAD}\n```\n\nEspero ter ajudado.",
            f"Resultado: {PAYLOAD} -- fim",
            f"```\n{PAYLOAD}```",
        ],
    )
    def test_same_result_regardless_of_noise(self, raw_text: str) -> None:
        summary = parse_classification(raw_text)
        assert summary == parse_classification(PAYLOAD)
        assert [c.title for c in summary.safe_clauses] == ["Prazo"]
        assert summary.risky_clauses[0].summary == "Multa de {3} aluguéis na rescisão."

    def test_payload_after_stray_brace_in_prose(self) -> None:
        raw = 'Formato { conforme pedido:\n{"seguras": [{"titulo": "A", "resumo": "B"}], "riscos": []}'
        summary = parse_classification(raw)
        assert [(c.title, c.summary) for c in summary.safe_clauses] == [("A", "B")]
        assert summary.risky_clauses == []

    def test_preserves_clause_order(self) -> None:
        raw = '{"seguras": [], "riscos": [' \
              '{"titulo": "C", "resumo": "3"}, {"titulo": "A", "resumo": "1"}, {"titulo": "B", "resumo": "2"}]}'
        summary = parse_classification(raw)
        assert [c.title for c in summary.risky_clauses] == ["C", "A", "B"]

    def test_serializes_with_wire_names(self) -> None:
        summary = parse_classification('```json {"seguras":[{"titulo":"A","resumo":"B"}],"riscos":[]} ```')
        assert summary.model_dump(by_alias=True) == {
            "seguras": [{"titulo": "A", "resumo": "B"}],
            "riscos": [],
        }

    def test_missing_group_defaults_to_empty(self) -> None:
        summary = parse_classification('{"riscos": [{"titulo": "A", "resumo": "B"}]}')
        assert summary.safe_clauses == []
        assert len(summary.risky_clauses) == 1

    def test_no_payload_fails_with_raw_text(self) -> None:
        raw = "Desculpe, não consegui classificar as cláusulas."
        with pytest.raises(ReconciliationError) as exc_info:
            parse_classification(raw)
        assert exc_info.value.raw_text == raw

    def test_invalid_json_region_fails_with_raw_text(self) -> None:
        raw = "Aqui: {seguras: [titulo: A]}"
        with pytest.raises(ReconciliationError) as exc_info:
            parse_classification(raw)
        assert exc_info.value.raw_text == raw

    def test_fenced_non_object_fails(self) -> None:
        raw = "```json\n[1, 2, 3]\n```"
        with pytest.raises(ReconciliationError, match="Expected a JSON object") as exc_info:
            parse_classification(raw)
        assert exc_info.value.raw_text == raw

    @pytest.mark.parametrize(
        "raw",
        [
            '{"seguras": [{"titulo": "", "resumo": "B"}], "riscos": []}',
            '{"seguras": [{"titulo": "A", "resumo": "   "}], "riscos": []}',
            '{"seguras": [{"titulo": "A"}], "riscos": []}',
            '{"seguras": "nenhuma", "riscos": []}',
        ],
    )
    def test_entries_without_title_or_summary_fail(self, raw: str) -> None:
        with pytest.raises(ReconciliationError) as exc_info:
            parse_classification(raw)
        assert exc_info.value.raw_text == raw

    def test_deterministic_failure(self) -> None:
        raw = "nada"
        messages = []
        for _ in range(2):
            with pytest.raises(ReconciliationError) as exc_info:
                parse_classification(raw)
            messages.append(exc_info.value.message)
        assert messages[0] == messages[1]
