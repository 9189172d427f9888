"""waconsole - session and WhatsApp connection console for the CRM connector"""

__version__ = "0.1.0"
