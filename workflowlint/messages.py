"""Message catalog.

Pure formatting: (message key, locale, positional params) -> title, message
and recommendation. Rules never build human text themselves; they emit a
message key plus typed parameters and the engine renders them here.

Supported locales: "en" (default) and "tr". Unknown locales and missing
keys fall back to English.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from workflowlint.rules.base import Finding

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class Template:
    """Localized text for one message key."""

    title: str
    message: Callable[..., str]
    recommendation: str


@dataclass(frozen=True)
class RenderedMessage:
    title: str
    message: str
    recommendation: str


def _head(values: Sequence[str], limit: int = 5) -> str:
    return ", ".join(values[:limit])


def _head_more(values: Sequence[str], limit: int = 5) -> str:
    return _head(values, limit) + ("..." if len(values) > limit else "")


def _fixed(text: str) -> Callable[..., str]:
    return lambda *_params: text


CATALOG: dict[str, dict[str, Template]] = {
    "en": {
        "invalid_yaml": Template(
            "Invalid YAML",
            lambda error: f"YAML parse error: {error}",
            "Check your YAML syntax.",
        ),
        "missing_jobs": Template(
            "Missing Jobs Section",
            _fixed('"jobs" section is required in workflow file.'),
            "Add a jobs: section with at least one job defined.",
        ),
        "invalid_event": Template(
            "Invalid Event",
            lambda event, valid: (
                f'"{event}" is not a valid GitHub Actions event. '
                f"Example valid events: {_head(valid)}..."
            ),
            "Check GitHub Actions documentation for valid events.",
        ),
        "invalid_permission": Template(
            "Invalid Permission",
            lambda perm, valid: (
                f'"{perm}" is not a valid permission scope. Valid scopes: {", ".join(valid)}'
            ),
            "Use only valid permission scopes.",
        ),
        "invalid_permission_level": Template(
            "Invalid Permission Level",
            lambda level: (
                f'"{level}" is not a valid permission level. Valid values: read, write, none'
            ),
            "Use read, write, or none.",
        ),
        "invalid_cron": Template(
            "Invalid Cron",
            lambda cron: f'"{cron}" is not a valid cron expression.',
            "Cron format: minute hour day month weekday (e.g., 0 0 * * 0)",
        ),
        "missing_runs_on": Template(
            "Missing Runs-on",
            lambda job: f'Job "{job}" requires a "runs-on" definition.',
            "Specify runs-on: ubuntu-latest or another runner.",
        ),
        "missing_steps": Template(
            "Missing Steps",
            lambda job: f'Job "{job}" requires a "steps" section.',
            "Add at least one step to each job.",
        ),
        "invalid_glob_pattern": Template(
            "Invalid Glob Pattern",
            lambda token: (
                f'Character "{token}" is invalid for branch/tag names. '
                "Only special characters [, ?, +, *, \\ are allowed."
            ),
            "Use glob patterns, not regex. Example: v* or release/**",
        ),
        "invalid_action_input": Template(
            "Invalid Action Input",
            lambda name, action, valid: (
                f'Input "{name}" is not defined in action "{action}". '
                f"Available inputs: {_head_more(valid)}"
            ),
            "Check action documentation and use the correct input name.",
        ),
        "unknown_event_key": Template(
            "Unknown Event Key",
            lambda key, event, valid: (
                f'"{key}" is not a valid key for "{event}" trigger. '
                f"Valid keys: {', '.join(valid) or 'none'}"
            ),
            "Use a valid key or check for typos.",
        ),
        "expression_injection": Template(
            "Expression Injection",
            lambda ctx: (
                f'"{ctx}" is user-controllable. Direct use in inline scripts is dangerous.'
            ),
            "Pass the variable as environment variable using env:",
        ),
        "hardcoded_secret": Template(
            "Hardcoded Secret",
            lambda name: f"{name} detected. Never store secrets in code.",
            "Use GitHub Secrets: ${{ secrets.YOUR_SECRET }}",
        ),
        "dangerous_trigger_prt": Template(
            "Dangerous Trigger",
            _fixed(
                "pull_request_target runs with write permissions and secret access for fork PRs."
            ),
            "Use pull_request trigger if possible. Choose checkout ref carefully if needed.",
        ),
        "dangerous_trigger_wr": Template(
            "Dangerous Trigger",
            _fixed("workflow_run can process artifacts from fork PRs."),
            "Validate artifact content, don't execute untrusted data.",
        ),
        "excessive_permissions": Template(
            "Excessive Permissions",
            _fixed("write-all grants full write access to all scopes."),
            "Explicitly specify only required permissions (contents: read, issues: write, etc.).",
        ),
        "unpinned_action": Template(
            "Unpinned Action",
            lambda action, ref: (
                f'"{action}" uses mutable ref "{ref}". Vulnerable to supply chain attacks.'
            ),
            "Pin actions to full commit SHA.",
        ),
        "dangerous_command": Template(
            "Dangerous Command",
            _fixed("Piping HTTP content directly to shell executes untrusted code."),
            "Download file first, verify checksum, then execute.",
        ),
        "unsafe_checkout": Template(
            "Unsafe Checkout",
            _fixed(
                "Checking out PR head ref with pull_request_target grants repository write access."
            ),
            "Process PR code in a separate workflow or use only PR number.",
        ),
        "invalid_runner": Template(
            "Invalid Runner",
            lambda runner: f'"{runner}" is not a valid GitHub-hosted runner.',
            "Use ubuntu-latest, macos-latest, or windows-latest.",
        ),
    },
    "tr": {
        "invalid_yaml": Template(
            "Geçersiz YAML",
            lambda error: f"YAML parse hatası: {error}",
            "YAML syntax'ınızı kontrol edin.",
        ),
        "missing_jobs": Template(
            "Jobs Section Eksik",
            _fixed('Workflow dosyasında "jobs" bölümü zorunludur.'),
            "jobs: bölümü ekleyin ve en az bir job tanımlayın.",
        ),
        "invalid_event": Template(
            "Geçersiz Event",
            lambda event, valid: (
                f'"{event}" geçerli bir GitHub Actions event\'i değil. '
                f"Örnek geçerli event'ler: {_head(valid)}..."
            ),
            "GitHub Actions dokümantasyonundan geçerli event'leri kontrol edin.",
        ),
        "invalid_permission": Template(
            "Geçersiz Permission",
            lambda perm, valid: (
                f'"{perm}" geçerli bir permission scope değil. '
                f"Geçerli scope'lar: {', '.join(valid)}"
            ),
            "Sadece geçerli permission scope'larını kullanın.",
        ),
        "invalid_permission_level": Template(
            "Geçersiz Permission Level",
            lambda level: (
                f'"{level}" geçerli bir permission level değil. Geçerli değerler: read, write, none'
            ),
            "read, write veya none kullanın.",
        ),
        "invalid_cron": Template(
            "Geçersiz Cron",
            lambda cron: f'"{cron}" geçerli bir cron ifadesi değil.',
            "Cron formatı: dakika saat gün ay gün_adı (örn: 0 0 * * 0)",
        ),
        "missing_runs_on": Template(
            "Runs-on Eksik",
            lambda job: f'"{job}" job\'unda "runs-on" tanımı zorunludur.',
            "runs-on: ubuntu-latest veya başka bir runner belirtin.",
        ),
        "missing_steps": Template(
            "Steps Eksik",
            lambda job: f'"{job}" job\'unda "steps" bölümü zorunludur.',
            "Her job'a en az bir step ekleyin.",
        ),
        "invalid_glob_pattern": Template(
            "Geçersiz Glob Pattern",
            lambda token: (
                f'"{token}" karakteri branch/tag isimlerinde geçersiz. '
                "Sadece [, ?, +, *, \\ özel karakterleri kullanılabilir."
            ),
            "Glob pattern kullanın, regex değil. Örnek: v* veya release/**",
        ),
        "invalid_action_input": Template(
            "Geçersiz Action Input",
            lambda name, action, valid: (
                f'"{name}" input\'u "{action}" action\'ında tanımlı değil. '
                f"Geçerli input'lar: {_head_more(valid)}"
            ),
            "Action'ın dokümantasyonunu kontrol edin ve doğru input adını kullanın.",
        ),
        "unknown_event_key": Template(
            "Bilinmeyen Event Key",
            lambda key, event, valid: (
                f'"{key}" "{event}" trigger\'ı için geçerli bir key değil. '
                f"Geçerli key'ler: {', '.join(valid) or 'yok'}"
            ),
            "Geçerli key kullanın veya typo kontrolü yapın.",
        ),
        "expression_injection": Template(
            "Expression Injection",
            lambda ctx: (
                f'"{ctx}" kullanıcı tarafından kontrol edilebilir. '
                "Inline script'lerde doğrudan kullanımı tehlikeli."
            ),
            "Değişkeni env: ile environment variable olarak geçirin.",
        ),
        "hardcoded_secret": Template(
            "Hardcoded Secret",
            lambda name: f"{name} tespit edildi. Secret'ları asla kod içinde tutmayın.",
            "GitHub Secrets kullanın: ${{ secrets.YOUR_SECRET }}",
        ),
        "dangerous_trigger_prt": Template(
            "Tehlikeli Trigger",
            _fixed(
                "pull_request_target fork PR'larında write izinleri ve secret erişimi ile çalışır."
            ),
            "Mümkünse pull_request trigger kullanın. Gerekiyorsa checkout ref dikkatli seçin.",
        ),
        "dangerous_trigger_wr": Template(
            "Tehlikeli Trigger",
            _fixed("workflow_run fork PR'larının artifact'larını işleyebilir."),
            "Artifact içeriğini doğrulayın, güvenilmeyen veri çalıştırmayın.",
        ),
        "excessive_permissions": Template(
            "Aşırı İzinler",
            _fixed("write-all tüm scope'lara full write erişimi verir."),
            "Sadece gerekli izinleri açıkça belirtin (contents: read, issues: write vb.).",
        ),
        "unpinned_action": Template(
            "Sabitlenmemiş Action",
            lambda action, ref: (
                f'"{action}" mutable ref "{ref}" kullanıyor. Supply chain saldırısına açık.'
            ),
            "Action'ları tam commit SHA ile sabitleyin.",
        ),
        "dangerous_command": Template(
            "Tehlikeli Komut",
            _fixed("HTTP içeriğini doğrudan shell'e pipe etmek güvensiz kod çalıştırır."),
            "Önce dosyayı indirin, checksum doğrulayın, sonra çalıştırın.",
        ),
        "unsafe_checkout": Template(
            "Unsafe Checkout",
            _fixed(
                "pull_request_target ile PR head ref checkout etmek repository yazma yetkisi verir."
            ),
            "PR kodunu ayrı bir workflow'da işleyin veya sadece PR numarasını kullanın.",
        ),
        "invalid_runner": Template(
            "Geçersiz Runner",
            lambda runner: f'"{runner}" geçerli bir GitHub-hosted runner değil.',
            "ubuntu-latest, macos-latest veya windows-latest kullanın.",
        ),
    },
}

SUPPORTED_LOCALES = tuple(CATALOG)


def normalize_locale(locale: str | None) -> str:
    """Map `tr-TR`, `TR`, None and unknown values onto a supported locale."""
    if not locale:
        return DEFAULT_LOCALE
    short = locale.strip().lower().replace("_", "-").split("-")[0]
    return short if short in CATALOG else DEFAULT_LOCALE


def render(key: str, locale: str | None, params: Sequence[Any] = ()) -> RenderedMessage:
    """Format the message for `key` in `locale`."""
    lang = normalize_locale(locale)
    template = CATALOG[lang].get(key) or CATALOG[DEFAULT_LOCALE].get(key)
    if template is None:
        return RenderedMessage(title=key, message=key, recommendation="")
    return RenderedMessage(
        title=template.title,
        message=template.message(*params),
        recommendation=template.recommendation,
    )


def localize(finding: Finding, locale: str | None) -> Finding:
    """Return a copy of `finding` with title, message and recommendation filled in."""
    rendered = render(finding.message_key, locale, finding.params)
    return replace(
        finding,
        title=rendered.title,
        message=rendered.message,
        recommendation=rendered.recommendation,
    )
