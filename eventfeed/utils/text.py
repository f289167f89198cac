import re


def slugify(text):
    """Lowercase slug used for logo file names."""
    text = (text or "").lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def parse_member_count(text):
    """
    Extract a member count from localized text.
    Takes the last run of thousand-separated digits: "1,234 members" -> 1234.
    """
    if not text:
        return None
    groups = re.findall(r"\d{1,3}(?:[,\u00a0\u202f]\d{3})*", text)
    if not groups:
        return None
    return int(re.sub(r"\D", "", groups[-1]))


def last_integer(text):
    if not text:
        return None
    numbers = re.findall(r"\d+", text)
    return int(numbers[-1]) if numbers else None


def meta_content(soup, prop):
    """Content of a <meta property=...> (or name=...) tag, if any."""
    tag = soup.find("meta", attrs={"property": prop}) or soup.find("meta", attrs={"name": prop})
    if tag and tag.get("content"):
        return tag["content"].strip()
    return None
