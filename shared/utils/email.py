import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any, Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import EmailStr

from shared.core.config import settings
from shared.core.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class EmailConfig:
    """SMTP connection and sender settings."""

    smtp_server: str
    smtp_port: int

    smtp_username: str
    smtp_password: str

    from_email: str
    from_name: str
    template_dir: str

    connection_security: str = "tls"  # Options: "tls", "ssl", "none"
    # When set, messages are rendered and logged instead of delivered
    dev_mode: bool = False

    @property
    def use_tls(self) -> bool:
        return self.connection_security == "tls"

    @property
    def use_ssl(self) -> bool:
        return self.connection_security == "ssl"


class EmailSender:
    def __init__(self, config: EmailConfig):
        self.config = config
        self.env = Environment(
            loader=FileSystemLoader(self.config.template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def _render_template(
        self, template_file: str, context: Dict[str, Any]
    ) -> str:
        try:
            template = self.env.get_template(template_file)
            return template.render(**context)
        except Exception as e:
            logger.error("Template rendering failed: %s", e)
            return ""

    def _connect_smtp(self) -> Optional[Union[smtplib.SMTP, smtplib.SMTP_SSL]]:
        try:
            if self.config.use_ssl:
                server: Union[smtplib.SMTP, smtplib.SMTP_SSL] = (
                    smtplib.SMTP_SSL(
                        self.config.smtp_server, self.config.smtp_port
                    )
                )
            else:
                server = smtplib.SMTP(
                    self.config.smtp_server, self.config.smtp_port
                )
                if self.config.use_tls:
                    server.starttls()
            server.login(
                self.config.smtp_username,
                self.config.smtp_password,
            )
            return server
        except Exception as e:
            logger.error("SMTP connection/login failed: %s", e)
            return None

    def send_email(
        self,
        to: EmailStr,
        subject: str,
        template_file: str,
        context: Dict[str, Any],
    ) -> bool:
        """Render ``template_file`` with ``context`` and send it to ``to``."""
        html = self._render_template(template_file, context)
        if not html:
            return False

        if self.config.dev_mode:
            logger.info(
                "EMAIL_DEV_MODE: not sending '%s' to %s (template=%s)",
                subject,
                to,
                template_file,
            )
            return True

        server = self._connect_smtp()
        if not server:
            return False

        msg = MIMEMultipart()
        msg["From"] = formataddr((self.config.from_name, self.config.from_email))
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(html, "html"))

        try:
            server.sendmail(self.config.from_email, to, msg.as_string())
            logger.info("Email sent to %s", to)
            return True
        except Exception as e:
            logger.error("Failed to send email: %s", e)
            return False
        finally:
            try:
                server.quit()
            except Exception as e:
                logger.warning("Failed to close SMTP connection: %s", e)


email_config = EmailConfig(
    smtp_server=settings.SMTP_HOST,
    smtp_port=settings.SMTP_PORT,
    smtp_username=settings.SMTP_USER,
    smtp_password=settings.SMTP_PASSWORD,
    from_email=settings.EMAIL_FROM,
    from_name=settings.EMAIL_FROM_NAME,
    template_dir=settings.EMAIL_TEMPLATES_DIR,
    connection_security="tls" if settings.SMTP_TLS else "none",
    dev_mode=settings.EMAIL_DEV_MODE,
)

email_sender = EmailSender(email_config)
