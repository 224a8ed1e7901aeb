from pydantic_settings import BaseSettings

from solargrind.assumptions import DEFAULT_ASSUMPTIONS, CalculatorAssumptions


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    app_name: str = "Solar Grind"
    cors_origins: str = "http://localhost:3000"
    log_json: bool = False
    log_level: str = "INFO"

    # NREL solar resource API
    nrel_api_key: str = ""
    nrel_base_url: str = "https://developer.nrel.gov/api/solar/solar_resource/v1.json"
    nrel_timeout_seconds: float = 10.0

    # Used when a request carries neither sun hours nor coordinates
    default_peak_sun_hours: float = 4.5

    # Per-client limits on the PDF and sun-hours endpoints
    report_rate_limit: int = 5
    sun_hours_rate_limit: int = 20
    rate_limit_window_seconds: int = 60
    trust_forwarded_for: bool = True

    # Policy overrides (unset keeps the calculator defaults)
    federal_credit_rate: float | None = None
    cost_per_watt: float | None = None
    utility_escalation_rate: float | None = None
    co2_tons_per_kwh: float | None = None

    def assumptions(self) -> CalculatorAssumptions:
        return DEFAULT_ASSUMPTIONS.with_overrides(
            federal_credit_rate=self.federal_credit_rate,
            cost_per_watt=self.cost_per_watt,
            utility_escalation_rate=self.utility_escalation_rate,
            co2_tons_per_kwh=self.co2_tons_per_kwh,
        )


settings = Settings()
