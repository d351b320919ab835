"""Card Selector — swap arcade memory card saves between a library and an emulator."""
