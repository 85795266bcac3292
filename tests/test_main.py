from __future__ import annotations

from kitchen_queue import main as main_module


def test_parser_defaults_output_to_input():
    args = main_module.build_parser().parse_args(["-i", "orders.txt"])

    assert args.input == "orders.txt"
    assert args.output is None


def test_main_loads_input_and_runs_app(tmp_path, monkeypatch):
    data = tmp_path / "orders.txt"
    data.write_text("-1 2\n2 Bo 2 1 0\n2 9 14", encoding="utf-8")
    seen = {}

    def fake_run(self):
        seen["app"] = self

    monkeypatch.setattr(main_module.KitchenQueueApp, "run", fake_run)
    monkeypatch.setattr(main_module, "configure_logging", lambda *args, **kwargs: None)

    main_module.main(["-i", str(data), "-o", str(tmp_path / "out.txt")])

    app = seen["app"]
    assert app.output_path == tmp_path / "out.txt"
    assert app.order_queue.next_id == 2
    assert app.order_queue.orders[0].skip_count == 1
    assert app.system_status == ""
