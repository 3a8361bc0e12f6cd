import pytest
from pydantic import ValidationError

from audience_commons.model.audience_model import AudienceSizeRequest


def test_request_keeps_raw_rules():
    rules = [{"field": "visits", "operator": ">", "value": 5, "condition": "AND"}]
    assert AudienceSizeRequest.model_validate({"rules": rules}).rules == rules

def test_request_without_rules():
    assert AudienceSizeRequest.model_validate({}).rules is None

def test_request_rules_are_not_validated_here():
    assert AudienceSizeRequest.model_validate({"rules": "visits > 5"}).rules == "visits > 5"

@pytest.mark.parametrize("body", [["rules"], "rules", 5, None])
def test_request_must_be_an_object(body):
    with pytest.raises(ValidationError):
        AudienceSizeRequest.model_validate(body)
