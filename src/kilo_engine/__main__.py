from kilo_engine.cli import main

raise SystemExit(main())
