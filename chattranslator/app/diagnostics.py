from __future__ import annotations


def summarize_exception(detail: str, *, max_len: int = 160) -> str:
    text = str(detail or "").strip()
    if not text:
        return "Unknown error."
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines:
        return "Unknown error."
    for ln in reversed(lines):
        if ln.startswith("File "):
            continue
        if ln.startswith("^"):
            continue
        if ln.startswith("Traceback "):
            continue
        out = ln
        break
    else:
        out = lines[-1]
    if len(out) > max_len:
        return out[: max_len - 3].rstrip() + "..."
    return out


def hint_for_exception(summary: str) -> str:
    s = str(summary or "").lower()
    if "not authenticated" in s or "no credentials" in s:
        return "Log in first: chattranslator login --api-key <KEY>"
    if "code 401" in s or "code 403" in s or "invalid google cloud platform credentials" in s:
        return "Google rejected the credentials. Check the key and that the Translation API is enabled."
    if "code 429" in s:
        return "Google quota exceeded. Wait and retry, or raise the project quota."
    if "api call failed" in s:
        return "Network call failed or timed out. Check connectivity and retry."
    if "config file not found" in s:
        return "Configured JSON file is missing. Update the config path or restore the file."
    return "Check logs for full traceback."
