from payload_masking.config import MaskingAttribute, MaskingRule
from payload_masking.core.rules import RuleIndex


def test_rules_sharing_a_key_are_concatenated_in_order():
    a = MaskingAttribute(jsonpath="$.a")
    b = MaskingAttribute(jsonpath="$.b")
    c = MaskingAttribute(jsonpath="$.c")
    index = RuleIndex.from_rules(
        [
            MaskingRule(type="JSON", attributes=[a, b]),
            MaskingRule(type="xml", attributes=[MaskingAttribute(xpath="//x")]),
            MaskingRule(type="json", attributes=[c]),
        ]
    )
    assert index.get("JSON") == (a, b, c)
    assert index.get("Json") == (a, b, c)
    assert len(index) == 2
    assert sorted(index.keys()) == ["json", "xml"]


def test_missing_key_returns_empty():
    index = RuleIndex.from_rules([])
    assert index.get("XML") == ()
    assert index.get("") == ()
    assert "xml" not in index


def test_rules_without_type_or_attributes_are_ignored():
    index = RuleIndex.from_rules(
        [
            MaskingRule(type="", attributes=[MaskingAttribute(xpath="//x")]),
            MaskingRule(type="FIXED", attributes=[]),
        ]
    )
    assert len(index) == 0


def test_subtype_keys_are_case_insensitive():
    attr = MaskingAttribute(xpath="//ns:Id")
    index = RuleIndex.from_rules([MaskingRule(type="XML_PAIN_013", attributes=[attr])])
    assert "xml_pain_013" in index
    assert index.get("xml_pain_013") == (attr,)
