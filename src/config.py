"""
Configurações do serviço de conversão markdown → slices.
"""

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SliceConfig:
    """
    Habilitação de slices nas instruções de geração.

    Consultada apenas por quem monta as instruções para o gerador de
    texto; o parser aceita todos os tipos independentemente destes flags.
    """

    # Core (sempre habilitados)
    typography: bool = True
    image: bool = True
    divider: bool = True
    blog_link: bool = True

    # Interativos
    notification: bool = True
    accordion: bool = True
    pros_cons: bool = True

    # Avançados (ENABLE_<TIPO>_SLICE)
    checklist: bool = False
    tips: bool = False
    table: bool = False
    dos_donts: bool = False
    quote: bool = False
    call_to_action: bool = False

    # Tipos que podem ser ligados/desligados via variável de ambiente
    TOGGLEABLE = ("checklist", "tips", "table", "dos_donts", "quote", "call_to_action")

    def is_enabled(self, slice_type: str) -> bool:
        """True se o tipo estiver habilitado (tipos desconhecidos: False)."""
        key = (slice_type or "").strip().lower().replace("-", "_")
        return self.as_dict().get(key, False)

    def enabled_slices(self) -> list[str]:
        return [name for name, enabled in self.as_dict().items() if enabled]

    def as_dict(self) -> dict[str, bool]:
        return {
            "typography": self.typography,
            "image": self.image,
            "divider": self.divider,
            "blog_link": self.blog_link,
            "notification": self.notification,
            "accordion": self.accordion,
            "pros_cons": self.pros_cons,
            "checklist": self.checklist,
            "tips": self.tips,
            "table": self.table,
            "dos_donts": self.dos_donts,
            "quote": self.quote,
            "call_to_action": self.call_to_action,
        }

    @classmethod
    def from_env(cls) -> "SliceConfig":
        """Carrega flags ENABLE_<TIPO>_SLICE (ex: ENABLE_TABLE_SLICE=true)."""
        defaults = cls()
        overrides = {
            name: _env_flag(f"ENABLE_{name.upper()}_SLICE", getattr(defaults, name))
            for name in cls.TOGGLEABLE
        }
        # Nome usado historicamente para call_to_action
        if os.getenv("ENABLE_CTA_SLICE") is not None:
            overrides["call_to_action"] = _env_flag("ENABLE_CTA_SLICE", False)
        return cls(**overrides)


@dataclass
class Config:
    """Configuração do serviço."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Limite de tamanho do markdown recebido pela API
    max_markdown_length: int = 200000

    # Slices habilitados nas instruções de geração
    slices: SliceConfig = field(default_factory=SliceConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Carrega configuração de variáveis de ambiente."""
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            max_markdown_length=int(os.getenv("MAX_MARKDOWN_LENGTH", "200000")),
            slices=SliceConfig.from_env(),
        )


# Singleton
config = Config.from_env()
