import pytest

from payload_masking.core import InvalidInputError, PayloadParseError, PayloadType

PAIN_013 = """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pain.013.001.02">
  <CdtrPmtActvtnReq>
    <DbtrAcct><Id><Othr><Id>12345678901234</Id></Othr></Id></DbtrAcct>
    <CdtrAcct><Id><Othr><Id>99887766554433</Id></Othr></Id></CdtrAcct>
    <Nm>ACME</Nm>
  </CdtrPmtActvtnReq>
</Document>"""


def test_json_account_is_masked(engine):
    res = engine.mask('{"acct":"1234567890123"}')
    assert res.masked_payload == '{"acct":"*********0123"}'
    assert res.resolved_type_label == "JSON"
    assert res.payload_type is PayloadType.JSON


def test_fixed_marker_offsets(engine):
    payload = "ACAI12345678901234567"
    res = engine.mask(payload)
    masked = res.masked_payload
    assert len(masked) == len(payload)
    assert masked[:4] == "ACAI"
    assert masked[4:18] == "**********1234"
    assert masked[18:] == payload[18:]
    assert res.resolved_type_label == "MFFIXED"


def test_unconfigured_type_uses_default_masking(engine):
    res = engine.mask("REF 9876543210123 END")
    assert res.masked_payload == "REF *********0123 END"
    assert res.resolved_type_label == "FIXED"
    assert res.payload_type is PayloadType.FIXED


def test_xml_subtype_rules_use_namespace(engine):
    res = engine.mask(PAIN_013)
    masked = res.masked_payload
    assert res.resolved_type_label == "xml_pain_013"
    assert "<Id>**********1234</Id>" in masked
    assert "<Id>**********4433</Id>" in masked
    assert "<Nm>ACME</Nm>" in masked
    assert masked.startswith("<?xml")


def test_xml_subtype_with_second_namespace_declaration(engine):
    payload = (
        '<Document xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        'xmlns="urn:iso:std:iso:20022:tech:xsd:camt.054.001.02">'
        "<Ntry><NtryRef>55554444333322</NtryRef></Ntry></Document>"
    )
    res = engine.mask(payload)
    assert res.resolved_type_label == "xml_camt_054"
    assert "<NtryRef>**********3322</NtryRef>" in res.masked_payload


def test_xml_subtype_without_rules_falls_back_to_default(engine):
    payload = (
        '<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pain.001.001.03">'
        "<Acct>1234567890123</Acct></Document>"
    )
    res = engine.mask(payload)
    assert res.resolved_type_label == "XML"
    assert "<Acct>*********0123</Acct>" in res.masked_payload


def test_plain_xml_uses_base_rules(engine):
    payload = (
        "<Payment><AccountNumber>1234567890</AccountNumber>"
        '<Account number="55556666777788"/></Payment>'
    )
    res = engine.mask(payload)
    assert res.resolved_type_label == "XML"
    assert res.masked_payload == (
        "<Payment><AccountNumber>******7890</AccountNumber>"
        '<Account number="**********7788"/></Payment>'
    )


@pytest.mark.parametrize("payload", ["", "   ", "\n\t", None])
def test_blank_payload_rejected(engine, payload):
    with pytest.raises(InvalidInputError):
        engine.mask(payload)


def test_malformed_json_is_fatal(engine):
    with pytest.raises(PayloadParseError) as exc:
        engine.mask('{"acct": 12345678901,}')
    assert exc.value.payload_type == "JSON"
    assert exc.value.__cause__ is not None


def test_malformed_xml_is_fatal(engine):
    with pytest.raises(PayloadParseError):
        engine.mask("<Payment><AccountNumber>1234567890</Payment>")


def test_results_are_not_shared_between_calls(engine):
    first = engine.mask(PAIN_013)
    second = engine.mask('{"acct":"1234567890123"}')
    assert first.resolved_type_label == "xml_pain_013"
    assert second.resolved_type_label == "JSON"
    assert not hasattr(engine, "last_detected_subtype")
