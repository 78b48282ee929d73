from ytimport.main import main

raise SystemExit(main())
