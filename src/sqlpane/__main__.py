from sqlpane.pane import main

main()
