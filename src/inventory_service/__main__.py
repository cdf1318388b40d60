from inventory_service.api import main

main()
