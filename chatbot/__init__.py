"""Multi-model command-line chatbot with conversation memory."""
