"""CSS styles for the TON Quick Transfer application."""

CSS = """
Screen {
    background: #1e1e2e;
}

Header {
    background: #181825;
    text-style: bold;
    padding: 0 1;
    height: 3;
}

Footer {
    background: #181825;
    height: 2;
}

Button {
    background: transparent;
    color: #3b82f6;
    border: none;
    height: 3;
    min-height: 3;
    min-width: 20;
    padding: 0 1;
    margin: 0;
    content-align: center middle;
}

Button:focus {
    background: #3b82f6;
    color: #ffffff;
    text-style: bold underline reverse;
}

Button:disabled {
    color: #585b70;
}

Horizontal {
    height: auto;
    margin: 0 0 1 0;
}

Select {
    width: 40;
    margin: 0 0 1 0;
}

#unlock-section, #transfer-section {
    height: auto;
    padding: 0 1;
}

#transfer-section:disabled {
    opacity: 60%;
}

#unlock-title, #transfer-title, #confirm-title, #tx-status-title {
    text-style: bold;
    color: #67e8f9;
    margin-bottom: 1;
    border-bottom: solid #22d3ee;
    padding-bottom: 0;
}

#wallet-info {
    padding: 0 1;
    background: #181825;
    border: solid #3b82f6;
    margin: 0 0 1 0;
}

#transfer-result, #tx-status-detail {
    margin: 1 0 0 0;
}

#tx-status-elapsed {
    color: #fbbf24;
}

Label {
    color: #e2e8f0;
}

Input {
    background: #181825;
    border: solid #3b82f6;
    color: #e2e8f0;
    padding: 0 1;
    min-height: 1;
}

Static {
    color: #a6adc8;
}

ModalScreen {
    align: center middle;
}

ModalScreen > * {
    max-width: 100;
}

#tx-hash-display {
    background: #181825;
    border: solid #3b82f6;
    padding: 0 1;
    margin: 0 0 1 0;
    color: #e2e8f0;
}

#result-title {
    text-style: bold;
    color: #67e8f9;
    margin-bottom: 1;
    border-bottom: solid #22d3ee;
    padding-bottom: 0;
}

#result-error {
    color: #f38ba8;
    margin-bottom: 1;
}
"""
