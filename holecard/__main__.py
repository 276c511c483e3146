from holecard.blackjack.blackjack import main

raise SystemExit(main())
