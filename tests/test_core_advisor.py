# Tests for the offline advisor table
import unittest

from core import advisor
from core.advisor import FALLBACK_RESPONSE, GREETING, KNOWLEDGE_BASE, ChatSession


def _response_for(keyword):
    return next(e.response for e in KNOWLEDGE_BASE if keyword in e.keywords)


class TestAdvisor(unittest.TestCase):
    def test_single_topic(self):
        self.assertEqual(advisor.responses("md5"), [_response_for("md5")])

    def test_multiple_topics_in_table_order(self):
        out = advisor.responses("Is MD5 still SAFE?")
        self.assertEqual(out, [_response_for("md5"), _response_for("safe")])
        self.assertEqual(advisor.answer("Is MD5 still SAFE?"), "\n\n".join(out))

    def test_unknown_and_blank(self):
        self.assertEqual(advisor.responses("xyz"), [FALLBACK_RESPONSE])
        self.assertEqual(advisor.responses("   "), [])
        self.assertEqual(advisor.answer(""), "")

    def test_chat_session(self):
        s = ChatSession()
        self.assertEqual(s.messages, [{"role": "assistant", "content": GREETING}])
        self.assertIsNone(s.ask("  "))
        reply = s.ask("what about rsa?")
        self.assertEqual(reply, advisor.answer("what about rsa?"))
        self.assertEqual([m["role"] for m in s.messages], ["assistant", "user", "assistant"])
        s.reset()
        self.assertEqual(len(s.messages), 1)

    def test_chat_session_resumes_transcript(self):
        saved = [{"role": "assistant", "content": GREETING}, {"role": "user", "content": "aes"}]
        s = ChatSession(saved)
        self.assertEqual(s.messages, saved)
        self.assertIsNot(s.messages[0], saved[0])


if __name__ == "__main__":
    unittest.main()
