# event_registration/crud/__init__.py

from .crud_badge import badge, badge_template
from .crud_contact import contact
from .crud_email_campaign import email_campaign
from .crud_email_log import email_log
from .crud_email_template import email_template
from .crud_event import event
from .crud_registration import registration
