ERRORS = {
  "E_CONFIG_MISMATCH": "Packages differ in window size, mode or algorithm",
  "E_GAP_UNSUPPORTED": "Index gap is outside the range the mode can link",
  "E_LAYOUT_MISMATCH": "Packages differ in block layout",
  "E_LADDER_MISMATCH": "Ladder blocks do not link the two signatures",
  "E_MALFORMED": "Package could not be decoded",
  "E_SIG_INVALID": "Anchor signature invalid",
}
