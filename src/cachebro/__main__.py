from cachebro.cli import main

raise SystemExit(main())
