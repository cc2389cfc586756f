# Import every model so Base.metadata knows all tables.
from .event import Event
from .contact import Contact
from .registration import Registration
from .email_template import EmailTemplate
from .email_campaign import EmailCampaign
from .email_log import EmailLog
from .badge import Badge, BadgeTemplate
