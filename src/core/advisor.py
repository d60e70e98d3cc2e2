# core/advisor.py
"""Cyra, the offline advisor: a static keyword -> response table.

Independent of the detection catalog. A question collects the response of
every entry with a keyword occurring in it (plain substring test on the
lower-cased question), in table order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class KnowledgeEntry:
    keywords: FrozenSet[str]
    response: str

    def matches(self, question: str) -> bool:
        return any(k in question for k in self.keywords)


def _entry(keywords, response: str) -> KnowledgeEntry:
    return KnowledgeEntry(frozenset(keywords), response)


GREETING = (
    "Hello! I'm Cyra, your CryptoFinder AI Assistant. I can help you understand "
    "cryptographic algorithms, firmware security, and best practices. "
    "What would you like to know?"
)

FALLBACK_RESPONSE = (
    "That's an interesting question! For specific guidance on cryptographic "
    "implementations, I recommend consulting security documentation or analyzing "
    "your firmware with our tool. I specialize in common algorithms like AES, RSA, "
    "SHA, ECC, and general security best practices."
)

KNOWLEDGE_BASE: Tuple[KnowledgeEntry, ...] = (
    _entry(
        ("aes", "advanced encryption standard"),
        "AES (Advanced Encryption Standard) is a symmetric encryption algorithm "
        "widely used for secure data transmission. AES-256 uses a 256-bit key and "
        "is considered highly secure for most applications. It's fast, efficient, "
        "and approved by the NSA for top-secret information.",
    ),
    _entry(
        ("rsa",),
        "RSA is an asymmetric cryptographic algorithm used for secure data "
        "transmission and digital signatures. RSA-2048 is currently considered "
        "secure, though RSA-4096 is recommended for long-term security. It uses "
        "public and private key pairs for encryption and decryption.",
    ),
    _entry(
        ("sha", "secure hash"),
        "SHA (Secure Hash Algorithm) is a family of cryptographic hash functions. "
        "SHA-1 is now considered weak and deprecated. SHA-256 and SHA-3 are "
        "currently recommended for secure applications. Hash functions are one-way "
        "functions used for data integrity verification.",
    ),
    _entry(
        ("ecc", "elliptic curve"),
        "ECC (Elliptic Curve Cryptography) provides the same level of security as "
        "RSA but with smaller key sizes, making it more efficient. ECC-256 is "
        "equivalent to RSA-3072 in terms of security. It's widely used in modern "
        "applications and mobile devices.",
    ),
    _entry(
        ("firmware", "iot", "embedded"),
        "Firmware security is critical for IoT and embedded devices. Key concerns "
        "include: using strong encryption (AES-256), secure boot processes, regular "
        "updates, avoiding deprecated algorithms (MD5, SHA-1, DES), and "
        "implementing proper authentication mechanisms.",
    ),
    _entry(
        ("md5",),
        "MD5 is a cryptographic hash function that is now considered broken and "
        "unsuitable for security purposes. It has known collision vulnerabilities "
        "where two different inputs can produce the same hash. Use SHA-256 or "
        "SHA-3 instead for secure hashing operations.",
    ),
    _entry(
        ("des", "data encryption standard"),
        "DES (Data Encryption Standard) is an obsolete encryption algorithm that "
        "uses a 56-bit key, which is too short by modern standards. It can be "
        "broken in hours with modern computing power. Use AES instead. 3DES is "
        "slightly better but still being phased out.",
    ),
    _entry(
        ("encryption", "cipher"),
        "Modern encryption algorithms include: AES (symmetric), RSA/ECC "
        "(asymmetric), and ChaCha20 (stream cipher). For hashing, use SHA-256 or "
        "SHA-3. Always use well-established algorithms and avoid creating custom "
        "cryptography.",
    ),
    _entry(
        ("hello", "hi", "hey", "greetings"),
        "Hello! I'm here to help you understand cryptographic concepts and "
        "firmware security. Feel free to ask me about AES, RSA, SHA, ECC, or any "
        "other security-related questions!",
    ),
    _entry(
        ("help", "what can you do"),
        "I can help you with:\n"
        "• Cryptographic algorithms (AES, RSA, SHA, ECC, etc.)\n"
        "• Firmware security best practices\n"
        "• Algorithm strength assessment\n"
        "• Encryption vs hashing\n"
        "• Security recommendations\n"
        "• Vulnerability analysis\n\n"
        "Just ask me anything about cryptography or security!",
    ),
    _entry(
        ("weak", "vulnerable", "insecure"),
        "Weak or deprecated algorithms include: MD5, SHA-1, DES, RC4, and "
        "RSA-1024. These should be avoided in production systems. Replace them "
        "with: SHA-256/SHA-3 for hashing, AES-256 for symmetric encryption, and "
        "RSA-2048/4096 or ECC for asymmetric encryption.",
    ),
    _entry(
        ("strong", "secure", "safe", "recommended"),
        "Strong, currently recommended algorithms include: AES-256 for symmetric "
        "encryption, RSA-2048/4096 or ECC-256+ for asymmetric encryption, and "
        "SHA-256/SHA-3 for hashing. Always use well-tested libraries and keep "
        "them updated.",
    ),
)


def responses(question: str) -> List[str]:
    q = (question or "").strip().lower()
    if not q:
        return []
    out = [e.response for e in KNOWLEDGE_BASE if e.matches(q)]
    return out or [FALLBACK_RESPONSE]


def answer(question: str) -> str:
    return "\n\n".join(responses(question))


class ChatSession:
    """Conversation transcript seeded with the greeting.

    messages: list of {"role": "user" | "assistant", "content": str}
    """

    def __init__(self, messages: Optional[List[Dict[str, str]]] = None):
        if messages:
            self.messages = [dict(m) for m in messages]
        else:
            self.messages = [{"role": "assistant", "content": GREETING}]

    def ask(self, question: str) -> Optional[str]:
        if not (question or "").strip():
            return None
        reply = answer(question)
        self.messages.append({"role": "user", "content": question})
        self.messages.append({"role": "assistant", "content": reply})
        return reply

    def reset(self) -> None:
        self.messages = [{"role": "assistant", "content": GREETING}]
