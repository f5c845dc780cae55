"""Privacy policy page template for generated sites."""

from html import escape
from typing import Optional

from sitebuilder.models.profile import Contact

_ANALYTICS_ENABLED = (
    "Optional analytics may be enabled only after user choice. If analytics is enabled, update "
    "this policy to identify the analytics provider, cookie names, and retention details."
)
_ANALYTICS_DISABLED = (
    "Optional analytics cookies are not enabled by default. If optional analytics is enabled in "
    "the future, this policy should be updated with provider and cookie details."
)


def _value_or_placeholder(value: Optional[str], placeholder: str) -> str:
    trimmed = (value or "").strip()
    return escape(trimmed) if trimmed else placeholder


def render_privacy_policy(
    business_name: str,
    contact: Contact,
    analytics_enabled: bool,
    notes: str = "",
) -> str:
    """Return the policy as a ``<section>``; missing contact details become placeholders."""
    name = escape(business_name.strip() or "This business")
    email = _value_or_placeholder(contact.email, "[Insert business email]")
    phone = _value_or_placeholder(contact.phone, "[Insert business phone]")
    address = _value_or_placeholder(contact.address, "[Insert business address]")
    notes = (notes or "").strip()
    notes_html = f"<p><strong>Additional privacy notes:</strong> {escape(notes)}</p>" if notes else ""

    return f"""<section class="panel">
  <h2>Privacy Policy</h2>
  <p>This Privacy Policy explains how {name} handles information collected through this website.</p>
  <h3>Information We Collect</h3>
  <p>When you use our contact form, we may collect your name, email address, phone number, and message. We may also collect technical request data needed to keep this website operating.</p>
  <h3>How We Use Information</h3>
  <p>We use submitted information to respond to inquiries, provide requested services, and follow up about your request.</p>
  <h3>Sharing and Disclosure</h3>
  <p>We may share information with service providers that help us run this website or provide services on our behalf. We do not sell personal information through this website.</p>
  <h3>Cookies and Similar Technologies</h3>
  <p>Essential cookies are used by default to support core website functions such as security, preference storage, and basic site operation.</p>
  <p>{_ANALYTICS_ENABLED if analytics_enabled else _ANALYTICS_DISABLED}</p>
  <h3>Data Retention</h3>
  <p>We retain inquiry information for as long as reasonably needed to respond to requests, deliver services, meet legal obligations, and resolve disputes.</p>
  <h3>Security</h3>
  <p>We use reasonable administrative, technical, and organizational measures designed to protect the information we maintain.</p>
  <h3>Children's Privacy</h3>
  <p>This website is not directed to children under 13, and we do not knowingly collect personal information from children through this website.</p>
  <h3>Changes to This Privacy Policy</h3>
  <p>We may update this policy from time to time. The latest version should be posted on this page with an updated effective date when practical.</p>
  <h3>Contact Us</h3>
  <p>If you have privacy questions or requests, contact us using the details below:</p>
  <ul>
    <li><strong>Email:</strong> {email}</li>
    <li><strong>Phone:</strong> {phone}</li>
    <li><strong>Address:</strong> {address}</li>
  </ul>
  {notes_html}
</section>"""
