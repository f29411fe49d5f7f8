"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from cashflow_engine.domain.models import AlertPolicy


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="CASHFLOW_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "cashflow-engine"
    log_level: str = "INFO"

    # Overdue collections
    overdue_warning_days: int = 30
    overdue_high_days: int = 90

    # Expense spike (month-over-month growth ratios)
    expense_spike_growth: float = 0.25
    expense_spike_high_growth: float = 0.40

    # Client payment trend
    client_recent_window_days: int = 30
    client_baseline_window_days: int = 120
    client_min_baseline_samples: int = 2
    client_slowdown_ratio: float = 1.3
    client_high_ratio: float = 1.6

    def alert_policy(self) -> AlertPolicy:
        """Detector thresholds as a domain policy object"""
        return AlertPolicy(
            overdue_warning_days=self.overdue_warning_days,
            overdue_high_days=self.overdue_high_days,
            expense_spike_growth=self.expense_spike_growth,
            expense_spike_high_growth=self.expense_spike_high_growth,
            client_recent_window_days=self.client_recent_window_days,
            client_baseline_window_days=self.client_baseline_window_days,
            client_min_baseline_samples=self.client_min_baseline_samples,
            client_slowdown_ratio=self.client_slowdown_ratio,
            client_high_ratio=self.client_high_ratio,
        )


settings = Settings()
