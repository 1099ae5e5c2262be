from datetime import date as date_cls
from sqlalchemy import Date, Float, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.base import Base


class DailyLogEntry(Base):
    __tablename__ = "daily_logs"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_logs_user_id_date"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date: Mapped[date_cls] = mapped_column(Date, nullable=False, index=True)
    workout_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    nutrition_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    sleep_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    sleep_quality: Mapped[float | None] = mapped_column(Float, nullable=True)
    energy_level: Mapped[float | None] = mapped_column(Float, nullable=True)
    stress_index: Mapped[float | None] = mapped_column(Float, nullable=True)
    resting_heart_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    water_intake: Mapped[float | None] = mapped_column(Float, nullable=True)  # glasses
    steps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    body_weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="daily_logs")
