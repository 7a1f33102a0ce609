from contact.config import DEFAULT_RECIPIENT, DeliveryConfig


def test_defaults_without_env():
    config = DeliveryConfig.from_env({})
    assert config.api_key is None
    assert not config.sendgrid_enabled
    assert config.recipient == DEFAULT_RECIPIENT
    assert config.sender == DEFAULT_RECIPIENT
    assert config.site_name == "ChargeFlow"


def test_recipient_falls_back_to_sender_address():
    config = DeliveryConfig.from_env({"SENDGRID_FROM": "from@example.com"})
    assert config.recipient == "from@example.com"
    assert config.sender == "from@example.com"


def test_sender_falls_back_to_recipient():
    config = DeliveryConfig.from_env({"CONTACT_TO": "to@example.com"})
    assert config.recipient == "to@example.com"
    assert config.sender == "to@example.com"


def test_all_set():
    config = DeliveryConfig.from_env({
        "SENDGRID_API_KEY": "SG.key",
        "CONTACT_TO": "to@example.com",
        "SENDGRID_FROM": "from@example.com",
        "CONTACT_SITE_NAME": "Acme",
    })
    assert config.sendgrid_enabled
    assert config.recipient == "to@example.com"
    assert config.sender == "from@example.com"
    assert config.site_name == "Acme"


def test_empty_values_count_as_unset():
    config = DeliveryConfig.from_env({"SENDGRID_API_KEY": "", "CONTACT_TO": "", "SENDGRID_FROM": ""})
    assert not config.sendgrid_enabled
    assert config.recipient == DEFAULT_RECIPIENT


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SENDGRID_API_KEY", "SG.env")
    monkeypatch.setenv("CONTACT_TO", "env@example.com")
    config = DeliveryConfig.from_env()
    assert config.api_key == "SG.env"
    assert config.recipient == "env@example.com"
