import os
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from jinja2 import Environment, FileSystemLoader, select_autoescape

from cafe.lib.logger import logger

EMAIL_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
jinja_env = Environment(
    loader=FileSystemLoader(EMAIL_TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
)


def render_template(template_name, context=None):
    template = jinja_env.get_template(template_name)
    return template.render(**(context or {}))


class Mailer:
    """SMTP mailer. Raises on transport failure; callers decide whether to retry."""

    def __init__(
        self,
        host,
        port,
        username,
        password,
        from_name="Klubnika Cafe",
        encryption="tls",
        timeout=10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_name = from_name
        self.encryption = encryption
        self.timeout = timeout

    def _connect(self):
        if self.encryption == "ssl":
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        if self.encryption == "tls":
            server.starttls()
        return server

    def send(self, to_email, subject, text, template_name, context=None, attachments=None):
        """``attachments`` is a list of ``(filename, bytes, mimetype)``."""
        if not to_email:
            logger.warning(f"Skip email '{subject}': no recipient")
            return False

        html_content = render_template(template_name, context)

        msg = MIMEMultipart("mixed")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.username or ""))
        msg["To"] = to_email

        body = MIMEMultipart("alternative")
        body.attach(MIMEText(text, "plain", "utf-8"))
        body.attach(MIMEText(html_content, "html", "utf-8"))
        msg.attach(body)

        for filename, content, mimetype in attachments or []:
            subtype = mimetype.split("/")[-1]
            part = MIMEApplication(content, _subtype=subtype)
            part.add_header("Content-Disposition", "attachment", filename=filename)
            msg.attach(part)

        server = self._connect()
        try:
            if self.username:
                server.login(self.username, self.password)
            server.sendmail(self.username, to_email, msg.as_string())
        finally:
            server.quit()

        logger.info(f"Email sent to {to_email}: {subject}")
        return True
