import unittest

from ui.state_helpers import (
    build_inputs_fingerprint,
    is_result_stale,
    save_result_fingerprint,
)


class TestUIStateHelpers(unittest.TestCase):
    def test_fingerprint_ignora_campos_que_no_son_input(self):
        a = {"client_budget": 500, "current_tariff": 0.95, "cliente": "A"}
        b = {"client_budget": 500.0, "current_tariff": 0.95, "cliente": "B"}
        self.assertEqual(build_inputs_fingerprint(a), build_inputs_fingerprint(b))

    def test_result_fingerprint_detecta_stale(self):
        state = {}
        entradas = {"client_budget": 500.0, "current_tariff": 0.95, "estado": "MG"}
        self.assertFalse(is_result_stale(state, entradas))

        fp = save_result_fingerprint(state, entradas)
        self.assertEqual(fp, build_inputs_fingerprint(entradas))
        self.assertFalse(is_result_stale(state, entradas))

        entradas["client_budget"] = 600.0
        self.assertTrue(is_result_stale(state, entradas))


if __name__ == "__main__":
    unittest.main()
