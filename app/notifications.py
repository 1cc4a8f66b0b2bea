# app/notifications.py
"""
"Booking created" notifications: confirmation email to the customer and an
outbound webhook (e.g. an n8n flow). Delivery runs after the response has
been sent; failures are logged here and never reach the booking caller.
"""

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import httpx

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingCreatedEvent:
    customer_name: str
    customer_phone: str
    customer_email: str
    service_name: str
    date: str
    time: str
    price: int  # cents
    duration: int

    @classmethod
    def from_booking(cls, booking, service) -> "BookingCreatedEvent":
        return cls(
            customer_name=booking.customer_name,
            customer_phone=booking.customer_phone,
            customer_email=booking.customer_email,
            service_name=service.name,
            date=booking.date,
            time=booking.time,
            price=service.price,
            duration=service.duration,
        )

    def webhook_payload(self) -> dict:
        return {
            "event": "new_booking",
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "customerEmail": self.customer_email,
            "serviceName": self.service_name,
            "date": self.date,
            "time": self.time,
            "price": self.price,
            "duration": self.duration,
        }


def format_price(cents: int) -> str:
    """Format cents as Brazilian reais, e.g. 4500 -> "R$ 45,00"."""
    reais, centavos = divmod(cents, 100)
    return f"R$ {reais:,}".replace(",", ".") + f",{centavos:02d}"


def booking_confirmation_html(event: BookingCreatedEvent, shop_name: str) -> str:
    return f"""
    <div style="font-family: monospace; padding: 40px; text-align: center;">
      <h1 style="text-transform: uppercase;">{shop_name}</h1>
      <p>Olá {event.customer_name},<br><br>O seu agendamento foi registado com sucesso.</p>
      <p><b>Serviço</b><br>{event.service_name}</p>
      <p><b>Data &amp; Hora</b><br>{event.date} às {event.time}</p>
      <p><b>Valor</b><br>{format_price(event.price)}</p>
      <p style="font-size: 12px;">Caso precise cancelar, entre em contacto com antecedência.</p>
    </div>
    """


class NotificationDispatcher:
    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def email_enabled(self) -> bool:
        return bool(self.settings.smtp_user and self.settings.smtp_password)

    def booking_created(self, event: BookingCreatedEvent) -> None:
        """Deliver through every configured channel; never raises."""
        if self.email_enabled:
            try:
                self.send_confirmation_email(event)
            except Exception:
                logger.exception("Booking confirmation email to %s failed", event.customer_email)
        else:
            logger.warning("Skipping confirmation email: SMTP credentials missing")

        if self.settings.webhook_url:
            try:
                self.post_webhook(event)
            except Exception:
                logger.exception("Booking webhook to %s failed", self.settings.webhook_url)

    def send_confirmation_email(self, event: BookingCreatedEvent) -> None:
        s = self.settings
        from_address = f'"{s.email_from_name}" <{s.smtp_user}>'

        msg = MIMEMultipart("alternative")
        msg["Subject"] = f"Confirmação de Agendamento - {s.email_from_name}"
        msg["From"] = from_address
        msg["To"] = event.customer_email
        msg.attach(MIMEText(booking_confirmation_html(event, s.email_from_name), "html"))

        context = ssl.create_default_context()
        if s.smtp_port == 465:
            server = smtplib.SMTP_SSL(s.smtp_host, s.smtp_port, context=context, timeout=10)
        else:
            server = smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=10)
            server.starttls(context=context)

        try:
            # app passwords are often pasted with spaces
            server.login(s.smtp_user, s.smtp_password.replace(" ", ""))
            server.sendmail(s.smtp_user, [event.customer_email], msg.as_string())
        finally:
            server.quit()
        logger.info("Booking confirmation email sent to %s", event.customer_email)

    def post_webhook(self, event: BookingCreatedEvent) -> None:
        with httpx.Client(timeout=self.settings.webhook_timeout_seconds) as client:
            response = client.post(self.settings.webhook_url, json=event.webhook_payload())
            response.raise_for_status()
        logger.info("Booking webhook delivered for %s %s", event.date, event.time)


# Dependency: overridden in tests with a recording fake
def get_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher(get_settings())