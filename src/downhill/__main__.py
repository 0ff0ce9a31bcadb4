from downhill.main import main

raise SystemExit(main())
