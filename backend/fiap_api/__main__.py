from fiap_api.main import main

main()
