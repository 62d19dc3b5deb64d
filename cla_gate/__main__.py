from cla_gate.main import main

raise SystemExit(main())
