from article_workflow.cli import main

raise SystemExit(main())
